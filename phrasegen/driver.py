import sys
from argparse import ArgumentParser, ArgumentTypeError, RawDescriptionHelpFormatter
from time import sleep

import xerox
from tabulate import tabulate

from .core import (DELIMITER, DEFAULT_FORMAT, DEFAULT_SYMBOLS, DEFAULT_COUNT,
                   Config, PhrasegenError, default_wordlist)
from .generator import TOKEN_HELP, generate_from_config

def print_err(*args, **kwargs):
    kwargs.update(file=sys.stderr, flush=True)
    print(*args, **kwargs)

class PassphraseActions:
    @staticmethod
    def print(passphrases):
        for passphrase in passphrases:
            print(passphrase)

    @staticmethod
    def clip(passphrases, delay=10):
        try:
            xerox.copy("\n".join(passphrases), xsel=True)
            noun = "Passphrase" if len(passphrases) == 1 else "{} passphrases".format(len(passphrases))
            print_err("{} copied to clipboard; clearing in {} seconds.".format(noun, delay))
            sleep(delay)
        finally:
            xerox.copy("", xsel=True)
            print_err("Clipboard cleared.")

def positive_int(value):
    try:
        ivalue = int(value)
    except ValueError:
        ivalue = 0
    if ivalue < 1:
        raise ArgumentTypeError("{} is not a positive integer".format(value))
    return ivalue

def format_help():
    tokens = [(DELIMITER + token.value, description) for token, description in TOKEN_HELP]
    return "\n".join([
        "Available tokens:",
        "",
        tabulate(tokens, headers=("Token", "Yields"), tablefmt="rst"),
        "",
        'Example: "pass{0}d{0}d{0}d_{0}w" yields "pass107_recopy"'.format(DELIMITER),
        "",
        "Tokens or groups of tokens can be repeated using the syntax ()*N,",
        "where N is the number of repetitions.",
        'Example: "({0}w{0}d)*3" yields "faster4employer0rectified3"'.format(DELIMITER),
    ])

def parse_args(argv=None):
    parser = ArgumentParser(description="Generate random passphrases from a format string.",
                            epilog=format_help(), formatter_class=RawDescriptionHelpFormatter)
    parser.add_argument("format", nargs="?", default=None,
                        help="Format of the generated passphrases [default: {}].".format(DEFAULT_FORMAT))
    parser.add_argument("-w", "--wordlist", default=default_wordlist(),
                        help="Pick words from this rank<TAB>word list [default: %(default)s].")
    parser.add_argument("-s", "--symbols", default=DEFAULT_SYMBOLS,
                        help="String of symbols to pick from [default: %(default)s].")
    parser.add_argument("-e", "--exclude", default="", dest="excluded",
                        help="Symbols to exclude.")
    parser.add_argument("-c", "--count", type=positive_int, default=DEFAULT_COUNT,
                        help="Number of passphrases to generate [default: %(default)s].")
    parser.add_argument("--clip", action="store_const", dest="pp_action",
                        const=PassphraseActions.clip, default=PassphraseActions.print,
                        help="Copy passphrases to the clipboard instead of printing them.")

    args = parser.parse_args(argv)
    if args.format is None:
        print_err("WARNING: No format provided! Using default format.",
                  "See --help for more information.\n", sep="\n")
        args.format = DEFAULT_FORMAT
    return args

def make_config(args):
    return Config(format=args.format, wordlist=args.wordlist, symbols=args.symbols,
                  excluded=args.excluded, count=args.count)

def run(argv=None):
    args = parse_args(argv)
    try:
        passphrases = generate_from_config(make_config(args))
    except PhrasegenError as e:
        print_err("Error: {}".format(e))
        return 1
    args.pp_action(passphrases)
    return 0
