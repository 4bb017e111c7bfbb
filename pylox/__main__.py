import argparse
import sys

from .lox import Lox, Status

EX_NOINPUT = 66


def run_file(lox, filename):
    try:
        with open(filename, "r") as file:
            source = file.read()
    except OSError as error:
        print(f"Could not read '{filename}': {error.strerror}.", file=sys.stderr)
        return EX_NOINPUT
    return lox.run(source).value


def run_prompt(lox):
    while True:
        try:
            line = input("> ")
        except EOFError:
            print()
            break
        lox.run(line)
    return Status.OK.value


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="pylox", description="Run Lox scripts")
    parser.add_argument("filename", nargs="?")
    args = parser.parse_args(argv)

    lox = Lox()
    if args.filename is not None:
        return run_file(lox, args.filename)
    return run_prompt(lox)


if __name__ == "__main__":
    sys.exit(main())
