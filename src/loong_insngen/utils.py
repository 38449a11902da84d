'''
bit-twiddling (u32, máscaras, rangos de inmediatos, hex)
'''

from __future__ import annotations
from typing import Tuple

# Máscara para 32 bits sin signo
U32_MASK = 0xFFFFFFFF

# Ancho de la palabra de instrucción
WORD_BITS = 32

def u32(x: int) -> int:
    """Fuerza el valor al rango de 32 bits sin signo."""
    return x & U32_MASK

def mask(width: int) -> int:
    """Máscara de 'width' bits a uno, p.ej. mask(5) == 0x1f."""
    if width <= 0:
        raise ValueError("width debe ser positivo")
    return (1 << width) - 1

def signed_range(n: int) -> Tuple[int, int]:
    """Rango cerrado [-(2^(n-1)), 2^(n-1)-1] de un inmediato con signo de n bits."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    return -(1 << (n - 1)), (1 << (n - 1)) - 1

def unsigned_range(n: int) -> Tuple[int, int]:
    """Rango cerrado [0, 2^n - 1] de un inmediato sin signo de n bits."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    return 0, (1 << n) - 1

def is_unsigned_nbit(x: int, n: int) -> bool:
    """Devuelve True si x está en [0, 2^n) (sin signo de n bits)."""
    lo, hi = unsigned_range(n)
    return lo <= x <= hi

def is_signed_nbit(x: int, n: int) -> bool:
    """Devuelve True si x está en [-(2^(n-1)), 2^(n-1)-1] (con signo de n bits)."""
    lo, hi = signed_range(n)
    return lo <= x <= hi

def to_hex32(x: int, *, prefix: bool = True) -> str:
    """Representación hexadecimal de 32 bits (cadena), con o sin prefijo 0x."""
    s = format(u32(x), "08x")
    return ("0x" + s) if prefix else s

def field_mask(offset: int, width: int) -> int:
    """Máscara del campo [offset, offset+width) dentro de la palabra."""
    return mask(width) << offset
