import re

_DIGITS = re.compile(r"([0-9]+)")


def row_to_letter(row_index: int) -> str:
    """Converte índice (1..26) para letra (A..Z), usado nos códigos de rack."""
    if row_index < 1:
        row_index = 1
    # Limitar a 26 letras caso extrapole
    row_index = min(row_index, 26)
    return chr(ord('A') + row_index - 1)


def natural_key(code: str):
    """
    Chave de ordenação natural para códigos de rack/bin:
    sequências de dígitos comparam como números ("A2" < "A10").
    Em empate (ex.: "a1" e "A1") decide o código original.
    """
    code = code or ""
    # split alterna texto/dígitos sempre começando por texto, então
    # posições ímpares são sempre números
    parts = [
        int(p) if i % 2 else p.lower()
        for i, p in enumerate(_DIGITS.split(code.strip()))
    ]
    return (parts, code)
