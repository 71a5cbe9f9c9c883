import sys
from .driver import run

def main():
    try:
        return run()
    except (KeyboardInterrupt, EOFError):
        print("Interrupted", file=sys.stderr)
        return 130

if __name__ == "__main__":
    sys.exit(main())
