from collections import deque
from typing import List, Optional, Tuple

from src.roster.models.entry import Entry


class Traversal:
    INORDER = "inorder"
    PREORDER = "preorder"
    POSTORDER = "postorder"
    LEVELORDER = "levelorder"


class BalancedIndex:
    """
    Árvore AVL que indexa registros (ID -> nome).
    Inserção e busca por ID em O(log n); busca por nome e percursos em O(n).

    A remoção sobrescreve o nó encontrado com os dados de um descendente
    (splice) e não reaplica rotações nos ancestrais: o balanceamento só é
    garantido após inserções. As alturas são sempre recalculadas no caminho.
    """
    def __init__(self):
        self.root: Optional[Entry] = None
        self.size = 0

    def __len__(self):
        return self.size

    def __contains__(self, key: int) -> bool:
        return self.lookup_by_key(key) is not None

    def is_empty(self) -> bool:
        return self.root is None

    # --- Operações públicas ---

    def insert(self, key: int, label: str) -> bool:
        """Insere um novo registro e rebalanceia. Retorna False se o ID já existe."""
        if self.lookup_by_key(key) is not None:
            return False

        self.root = self._insert_recursive(self.root, key, label)
        self.size += 1
        return True

    def remove(self, key: int) -> bool:
        """Remove o registro com o ID informado. Retorna True se algum nó saiu."""
        if self.root is None:
            return False

        removed = self._remove_recursive(self.root, None, key)
        if removed:
            self.size -= 1
        return removed

    def remove_by_rank(self, rank: int) -> bool:
        """
        Remove o registro na posição `rank` da ordem crescente de IDs (0 = menor).
        Retorna False se a posição não existe ou a árvore está vazia.
        """
        if self.root is None or rank < 0:
            return False

        removed, _ = self._remove_by_rank_recursive(self.root, None, rank)
        if removed:
            self.size -= 1
        return removed

    def lookup_by_key(self, key: int) -> Optional[str]:
        """Busca um registro pelo ID. Retorna o nome ou None."""
        current = self.root
        while current:
            if key == current.key:
                return current.label
            elif key < current.key:
                current = current.left
            else:
                current = current.right
        return None

    def lookup_by_label(self, label: str) -> List[int]:
        """Retorna os IDs de todos os registros com o nome informado (ordem pré-fixada)."""
        keys: List[int] = []
        self._collect_keys(self.root, label, keys)
        return keys

    def traversal(self, order: str = Traversal.INORDER) -> List[str]:
        """Retorna os nomes na ordem de percurso pedida."""
        labels: List[str] = []
        if order == Traversal.INORDER:
            self._in_order(self.root, labels)
        elif order == Traversal.PREORDER:
            self._pre_order(self.root, labels)
        elif order == Traversal.POSTORDER:
            self._post_order(self.root, labels)
        elif order == Traversal.LEVELORDER:
            self._level_order(self.root, labels)
        else:
            raise ValueError(f"Ordem de percurso desconhecida: {order}")
        return labels

    def depth(self) -> int:
        """
        Conta os níveis da raiz até a folha mais distante (BFS por níveis).
        Árvore vazia = 0, apenas a raiz = 1.
        """
        if not self.root:
            return 0

        queue = deque([self.root])
        expected = 1     # Nós restantes no nível atual
        counted = 0      # Nós já enfileirados para o próximo nível
        levels = 0

        while queue:
            current = queue.popleft()

            for child in (current.left, current.right):
                if child:
                    queue.append(child)
                    counted += 1

            expected -= 1
            if expected == 0:
                expected = counted
                counted = 0
                levels += 1

        return levels

    # --- Inserção ---

    def _insert_recursive(self, node: Optional[Entry], key: int, label: str) -> Entry:
        if not node:
            return Entry(key, label)

        if key < node.key:
            node.left = self._insert_recursive(node.left, key, label)
        else:
            node.right = self._insert_recursive(node.right, key, label)

        self._update_height(node)
        return self._rebalance(node)

    def _rebalance(self, node: Entry) -> Entry:
        balance = self._get_balance(node)

        # Pesado à direita
        if balance < -1:
            if self._get_balance(node.right) == 1:
                # Caso Direita-Esquerda
                node.right = self._rotate_right(node.right)
            return self._rotate_left(node)

        # Pesado à esquerda
        if balance > 1:
            if self._get_balance(node.left) == -1:
                # Caso Esquerda-Direita
                node.left = self._rotate_left(node.left)
            return self._rotate_right(node)

        return node

    # --- Remoção ---

    def _remove_recursive(self, node: Optional[Entry], parent: Optional[Entry], key: int) -> bool:
        if not node:
            return False

        if key < node.key:
            removed = self._remove_recursive(node.left, node, key)
        elif key > node.key:
            removed = self._remove_recursive(node.right, node, key)
        else:
            self._delete_entry(node, parent)
            removed = True

        if removed:
            self._update_height(node)
        return removed

    def _remove_by_rank_recursive(self, node: Optional[Entry], parent: Optional[Entry],
                                  remaining: int) -> Tuple[bool, int]:
        """
        Percurso em ordem carregando o contador de posições restantes.
        Retorna (removido, contador atualizado).
        """
        if not node:
            return False, remaining

        removed, remaining = self._remove_by_rank_recursive(node.left, node, remaining)

        if not removed:
            if remaining == 0:
                self._delete_entry(node, parent)
                removed = True
            else:
                remaining -= 1
                removed, remaining = self._remove_by_rank_recursive(node.right, node, remaining)

        if removed:
            self._update_height(node)
        return removed, remaining

    def _delete_entry(self, node: Entry, parent: Optional[Entry]):
        """
        Remove fisicamente um nó. Com filhos, o nó recebe a chave/nome de um
        descendente e o descendente é descartado.
        """
        left = node.left
        right = node.right

        # Caso 1 - Folha: desliga do pai (ou esvazia a árvore)
        if not left and not right:
            if parent is None:
                self.root = None
            elif parent.left is node:
                parent.left = None
            else:
                parent.right = None

        # Caso 2 - Apenas filho esquerdo
        elif not right:
            node.key, node.label = left.key, left.label
            node.left, node.right = left.left, left.right

        # Caso 3 - Apenas filho direito
        elif not left:
            node.key, node.label = right.key, right.label
            node.left, node.right = right.left, right.right

        # Caso 4a - Dois filhos, o direito não tem subárvore esquerda
        elif not right.left:
            node.key, node.label = right.key, right.label
            node.right = right.right

        # Caso 4b - Dois filhos: sucessor em ordem
        else:
            successor = self._detach_leftmost(right)
            node.key, node.label = successor.key, successor.label

        self._update_height(node)

    def _detach_leftmost(self, node: Entry) -> Entry:
        """Desliga o nó mais à esquerda abaixo de `node` (que tem filho esquerdo)."""
        if not node.left.left:
            leftmost = node.left
            node.left = leftmost.right
        else:
            leftmost = self._detach_leftmost(node.left)

        self._update_height(node)
        return leftmost

    # --- Métodos Auxiliares e Rotações ---

    def _get_height(self, node: Optional[Entry]) -> int:
        if not node:
            return -1
        return node.height

    def _update_height(self, node: Entry):
        node.height = 1 + max(self._get_height(node.left), self._get_height(node.right))

    def _get_balance(self, node: Optional[Entry]) -> int:
        if not node:
            return 0
        return self._get_height(node.left) - self._get_height(node.right)

    def _rotate_left(self, z: Entry) -> Entry:
        """
        Rotação simples à esquerda (anti-horária).
        Usada quando o peso está na direita (Direita-Direita).
        """
        y = z.right
        T2 = y.left

        y.left = z
        z.right = T2

        self._update_height(z)
        self._update_height(y)
        return y

    def _rotate_right(self, z: Entry) -> Entry:
        """
        Rotação simples à direita (horária).
        Usada quando o peso está na esquerda (Esquerda-Esquerda).
        """
        y = z.left
        T3 = y.right

        y.right = z
        z.left = T3

        self._update_height(z)
        self._update_height(y)
        return y

    # --- Percursos ---

    def _collect_keys(self, node: Optional[Entry], label: str, keys: List[int]):
        if node:
            if node.label == label:
                keys.append(node.key)
            self._collect_keys(node.left, label, keys)
            self._collect_keys(node.right, label, keys)

    def _in_order(self, node: Optional[Entry], labels: List[str]):
        if node:
            self._in_order(node.left, labels)
            labels.append(node.label)
            self._in_order(node.right, labels)

    def _pre_order(self, node: Optional[Entry], labels: List[str]):
        if node:
            labels.append(node.label)
            self._pre_order(node.left, labels)
            self._pre_order(node.right, labels)

    def _post_order(self, node: Optional[Entry], labels: List[str]):
        if node:
            self._post_order(node.left, labels)
            self._post_order(node.right, labels)
            labels.append(node.label)

    def _level_order(self, node: Optional[Entry], labels: List[str]):
        if not node:
            return
        queue = deque([node])
        while queue:
            current = queue.popleft()
            labels.append(current.label)
            if current.left:
                queue.append(current.left)
            if current.right:
                queue.append(current.right)
