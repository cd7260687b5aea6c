#!/usr/bin/env python
import random
import sys
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter

from .config import resolve_config
from .corpus import load_text
from .errors import ConfigError, TrieError
from .generator import Generator
from .model import ContextModel


def build_parser():
    parser = ArgumentParser(
        prog="triegen",
        description="Generate text from a character-level Markov model "
                    "built over a training file.",
        formatter_class=ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("context_length", nargs="?", type=int,
                        help="characters of context per prediction")
    parser.add_argument("output_length", nargs="?", type=int,
                        help="number of generation steps")
    parser.add_argument("input_path", nargs="?", help="training text file")
    parser.add_argument("--config", help="JSON file with default settings")
    parser.add_argument("--seed", type=int, default=None,
                        help="random seed (wall clock when omitted)")
    parser.add_argument("--encoding", default=None,
                        help="encoding of the training file (utf-8 when omitted)")
    parser.add_argument("--dump", action="store_true",
                        help="print the trained trie to stderr")
    parser.add_argument("--quiet", action="store_true", default=None,
                        help="suppress progress messages")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = resolve_config(vars(args), path=args.config)
    except (ConfigError, OSError) as e:
        parser.error(str(e))

    def log(message):
        if not config["quiet"]:
            print(message, file=sys.stderr)

    path = config["input_path"]
    log("Loading training data from {}".format(path))
    try:
        text = load_text(path, encoding=config["encoding"])
    except (OSError, LookupError) as e:
        print("Error: cannot read {}: {}".format(path, e), file=sys.stderr)
        return 1
    log("  Loaded {} characters".format(len(text)))

    model = ContextModel(config["context_length"])
    try:
        log("Training")
        observed = model.train(text)
        log("  Context model trained: {} transitions, {} contexts, {} nodes".format(
            observed, model.contexts, model.store.live_nodes))
        if args.dump:
            print(model.dump(), file=sys.stderr)

        log("Generating {} characters".format(config["output_length"]))
        generator = Generator(model, text, random.Random(config["seed"]))
        out = sys.stdout
        for symbol in generator.generate(config["output_length"]):
            out.write(symbol)
        out.flush()
        log("\n  Emitted {} characters, {} window resets".format(
            generator.emitted, generator.resets))
    except TrieError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1
    finally:
        model.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
