"""
Ponto de entrada: lê do stdin a quantidade de comandos e os comandos,
escreve no stdout uma linha por resultado.

Uso:
    roster-avl [--verbose] < comandos.txt
"""
import sys
from typing import List, Optional, TextIO

from src.roster.io.command_interpreter import CommandInterpreter


def main(argv: Optional[List[str]] = None, stdin: TextIO = None, stdout: TextIO = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    interpreter = CommandInterpreter(verbose="--verbose" in argv)
    for line in interpreter.run(stdin):
        stdout.write(line + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
