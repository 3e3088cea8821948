import sys

from rich.pretty import pprint

from cmdapp import *

parser = Parser(descr="A sample program to exercise the option parser.", shell=True, colorful=True)
parser.program.author("Ethan Uppal")
parser.program.author("Eric Yachbes")
parser.program.year(2024)
parser.program.version(1, 0, 0)
parser.program.info("All rights reserved.")
parser.program.synopsis("[OPTION]... [FILE]...")

parser.option("a", "argument", ".", Slot("VALUE"), descr="takes a required argument")
parser.option("A", "optional", ".?", Slot(), descr="takes an optional argument")
parser.option("b", "bflag", "*", descr="a clusterable flag")
parser.option("c", "cflag", "*", descr="another clusterable flag")
parser.option("d", "conflicts", "!@bc", descr="cannot be used with -b or -c")
parser.option("O", "requires", "&ad", descr="requires both -a and -d")


def on_option(short, long, value, data):
    data.append(("option", short, long, value))


def on_argument(value, data):
    data.append(("argument", value))


parser.callbacks(on_option, on_argument)


if __name__ == '__main__':
    received = []
    if not parser.parse(sys.argv, received):
        sys.exit(1)
    pprint(received)
