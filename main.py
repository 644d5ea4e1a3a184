from rich.pretty import pprint

from argosy import *

__prog__ = "argosy-demo"


parser = ArgumentParser(shell=True, fancy=True)
parser.add_argument("repo", "path to the repository")
parser.add_argument("--num-times", "how many times to run", type=ArgType.INT, default="1")
parser.add_argument("--ratio", "sampling ratio", type=ArgType.FLOAT)
parser.add_argument("--dry-run", "only print what would happen", type=ArgType.BOOL)
parser.add_argument("--verbose", "chatty output", action="store_true")


if __name__ == '__main__':
    pprint(parser.parse())
    pprint({key: parser.resolve(key) for key in parser.registry})
