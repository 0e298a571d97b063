"""Arredondamento usado nas médias e taxas do boletim."""

import math


def arredondar(valor: float, casas: int = 2) -> float:
    """Arredonda com meio para cima (6.125 -> 6.13), diferente do round() bancário."""
    fator = 10 ** casas
    return math.floor(valor * fator + 0.5) / fator
