## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import math
from typing import Any
from decimal import Decimal

from .types import kind_of


def format_number(x: float) -> str:
    """Shortest round-tripping text, positional for exponents -6 to 20, otherwise like `1.5e-7` or `1e+21`."""
    if math.isnan(x): return 'NaN'
    if math.isinf(x): return 'Infinity' if x > 0 else '-Infinity'
    if x == int(x) and abs(x) < 1e21: return str(int(x))
    text = repr(float(x))
    mantissa, _, exponent = text.partition('e')
    if not exponent:
        return text
    if -7 < (power := int(exponent)) < 21:
        return format(Decimal(text), 'f')
    return f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def format_value(value: Any, quoted: bool = False) -> str:
    """Render a language value as text; strings are only quoted when asked, e.g. in the REPL."""
    match kind_of(value):
        case 'number': return format_number(value)
        case 'boolean': return 'true' if value else 'false'
        case 'string': return '"' + value.replace('"', '\\"') + '"' if quoted else value
    return repr(value)


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))
