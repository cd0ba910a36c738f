from typing import Optional


class Entry:
    """
    Nó interno do índice balanceado.
    Armazena a chave (ID de 8 dígitos), o rótulo (nome) e a altura em cache.
    """
    def __init__(self, key: int, label: str):
        self.key = key          # ID único, define a ordenação
        self.label = label      # Nome associado (pode se repetir)
        self.left: Optional["Entry"] = None
        self.right: Optional["Entry"] = None
        self.height = 0         # Folha tem altura 0 (subárvore vazia = -1)

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self):
        return f"Entry(key={self.key:08d}, label={self.label!r}, h={self.height})"
