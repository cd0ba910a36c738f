"""
Validação das entradas textuais antes de chegarem ao índice.
O núcleo (BalancedIndex) assume que ID, nome e posição já são válidos.
"""

ID_LENGTH = 8


def _is_ascii_digit(char: str) -> bool:
    return "0" <= char <= "9"


def validate_name(name: str) -> bool:
    """Nome válido contém apenas letras A-Z, a-z e espaço."""
    for char in name:
        if not (char == " " or "A" <= char <= "Z" or "a" <= char <= "z"):
            return False
    return True


def validate_id(id_str: str) -> bool:
    """ID válido tem exatamente 8 dígitos ASCII."""
    if len(id_str) != ID_LENGTH:
        return False
    return all(_is_ascii_digit(char) for char in id_str)


def validate_count(count_str: str) -> bool:
    """Posição em ordem (removeInorder): inteiro não negativo, só dígitos."""
    if not count_str:
        return False
    return all(_is_ascii_digit(char) for char in count_str)


def format_id(key: int) -> str:
    """Converte o ID inteiro para a forma de 8 caracteres com zeros à esquerda."""
    return f"{key:0{ID_LENGTH}d}"
