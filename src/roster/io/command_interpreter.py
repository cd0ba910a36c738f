import sys
from itertools import islice
from typing import Iterable, List, Optional

from src.roster.structures.balanced_index import BalancedIndex, Traversal
from src.roster.io.validators import validate_name, validate_id, validate_count, format_id


class Command:
    INSERT = "insert"
    REMOVE = "remove"
    REMOVE_INORDER = "removeInorder"
    SEARCH = "search"
    PRINT_INORDER = "printInorder"
    PRINT_PREORDER = "printPreorder"
    PRINT_POSTORDER = "printPostorder"
    PRINT_LEVELORDER = "printLevelorder"
    PRINT_LEVEL_COUNT = "printLevelCount"


class CommandInterpreter:
    """
    Camada textual sobre o BalancedIndex.
    Lê uma linha de comando, valida os argumentos, chama o índice e devolve
    as linhas de saída. Entradas inválidas nunca chegam ao índice.
    """
    SUCCESS = "successful"
    FAILURE = "unsuccessful"
    SEPARATOR = ", "
    MAX_LOGS = 50

    PRINT_ORDERS = {
        Command.PRINT_INORDER: Traversal.INORDER,
        Command.PRINT_PREORDER: Traversal.PREORDER,
        Command.PRINT_POSTORDER: Traversal.POSTORDER,
        Command.PRINT_LEVELORDER: Traversal.LEVELORDER,
    }

    def __init__(self, index: Optional[BalancedIndex] = None, verbose: bool = False):
        self.index = index if index is not None else BalancedIndex()
        self.verbose = verbose
        self.logs: List[str] = []

    def run(self, lines: Iterable[str]) -> List[str]:
        """
        Processa um fluxo completo: a primeira linha não vazia traz a quantidade
        de comandos, seguida pelos comandos (um por linha).
        Linhas em branco são ignoradas e não contam como comando.
        """
        commands = (line for line in lines if line.strip())

        header = next(commands, None)
        if header is None:
            self.log("Fluxo vazio: nenhum comando lido.")
            return []

        count_str = header.strip()
        if not validate_count(count_str):
            self.log(f"Quantidade de comandos inválida: {count_str!r}")
            return []

        expected = int(count_str)
        output: List[str] = []
        handled = 0
        for line in islice(commands, expected):
            output.extend(self.handle(line))
            handled += 1

        if handled < expected:
            self.log(f"Fluxo terminou após {handled} de {expected} comandos.")
        return output

    def handle(self, line: str) -> List[str]:
        """Executa um único comando e retorna as linhas que devem ser impressas."""
        command, _, args = line.strip().partition(" ")

        if command == Command.INSERT:
            return [self._insert(args)]
        if command == Command.REMOVE:
            return [self._remove(args.strip())]
        if command == Command.REMOVE_INORDER:
            return [self._remove_inorder(args.strip())]
        if command == Command.SEARCH:
            return self._search(args.strip())
        if command in self.PRINT_ORDERS:
            labels = self.index.traversal(self.PRINT_ORDERS[command])
            return [self.SEPARATOR.join(labels)]
        if command == Command.PRINT_LEVEL_COUNT:
            return [str(self.index.depth())]

        self.log(f"Comando desconhecido: {command!r}")
        return [self.FAILURE]

    def log(self, msg: str):
        if self.verbose:
            print(msg, file=sys.stderr)
        self.logs.append(msg)
        # Mantém apenas as últimas mensagens em memória
        if len(self.logs) > self.MAX_LOGS:
            self.logs.pop(0)

    # --- Comandos ---

    def _insert(self, args: str) -> str:
        # Formato: "Nome Completo" 12345678
        first_quote = args.find('"')
        second_quote = args.find('"', first_quote + 1) if first_quote >= 0 else -1
        if second_quote < 0:
            self.log(f"insert mal formado: {args!r}")
            return self.FAILURE

        name = args[first_quote + 1:second_quote]
        id_str = args[second_quote + 1:].strip()
        if not validate_name(name) or not validate_id(id_str):
            self.log(f"insert inválido: nome={name!r} id={id_str!r}")
            return self.FAILURE

        if not self.index.insert(int(id_str), name):
            self.log(f"insert rejeitado: ID {id_str} já existe")
            return self.FAILURE
        return self.SUCCESS

    def _remove(self, id_str: str) -> str:
        if not validate_id(id_str):
            self.log(f"remove inválido: {id_str!r}")
            return self.FAILURE

        if not self.index.remove(int(id_str)):
            self.log(f"remove: ID {id_str} não encontrado")
            return self.FAILURE
        return self.SUCCESS

    def _remove_inorder(self, count_str: str) -> str:
        if not validate_count(count_str):
            self.log(f"removeInorder inválido: {count_str!r}")
            return self.FAILURE

        if not self.index.remove_by_rank(int(count_str)):
            self.log(f"removeInorder: posição {count_str} fora dos limites")
            return self.FAILURE
        return self.SUCCESS

    def _search(self, arg: str) -> List[str]:
        # Busca por ID
        if validate_id(arg):
            label = self.index.lookup_by_key(int(arg))
            if label is None:
                return [self.FAILURE]
            return [label]

        # Busca por nome (entre aspas)
        if len(arg) < 2 or arg[0] != '"' or arg[-1] != '"':
            self.log(f"search mal formado: {arg!r}")
            return [self.FAILURE]

        name = arg[1:-1]
        if not validate_name(name):
            return [self.FAILURE]

        keys = self.index.lookup_by_label(name)
        if not keys:
            return [self.FAILURE]
        return [format_id(key) for key in keys]
