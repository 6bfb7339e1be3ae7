"""Institution-specific statement formats.

Each module declares FormatEntry values for one institution. The order
of INSTITUTION_FORMATS is the detection priority.
"""

from .bradesco import BRADESCO, BRADESCO_EXTRATO
from .digital import C6, INTER
from .itau import ITAU
from .nubank import NUBANK
from .santander import SANTANDER

INSTITUTION_FORMATS = (
    BRADESCO_EXTRATO,
    NUBANK,
    ITAU,
    BRADESCO,
    SANTANDER,
    C6,
    INTER,
)

__all__ = [
    "BRADESCO",
    "BRADESCO_EXTRATO",
    "C6",
    "INTER",
    "ITAU",
    "NUBANK",
    "SANTANDER",
    "INSTITUTION_FORMATS",
]
