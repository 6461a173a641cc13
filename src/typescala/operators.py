## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Native methods, dispatched on the kind of the receiver (the left operand of an infix).
#

import math
from typing import Any

from .types import Iterator, make_range, kind_of
from .formatting import format_number


## NUMBER
def op_add(b: float, a: float) -> float: return b + a
def op_sub(b: float, a: float) -> float: return b - a
def op_mul(b: float, a: float) -> float: return b * a
def op_div(b: float, a: float) -> float:
    if a == 0:
        if b == 0 or math.isnan(b): return math.nan
        return math.copysign(math.inf, b) * math.copysign(1.0, a)
    return b / a
def op_equal(b: float, a: float) -> bool: return b == a
def op_lt(b: float, a: float) -> bool: return b < a
def op_lte(b: float, a: float) -> bool: return b <= a
def op_gt(b: float, a: float) -> bool: return b > a
def op_gte(b: float, a: float) -> bool: return b >= a
def op_range_exclusive(b: float, a: float) -> Iterator: return make_range(b, a, inclusive=False)
def op_range_inclusive(b: float, a: float) -> Iterator: return make_range(b, a, inclusive=True)
## STRING
def op_concat(b: str, a: Any) -> str:
    match kind_of(a):
        case 'string': return b + a
        case 'number': return b + format_number(a)
        case 'boolean': return b + ('true' if a else 'false')
    return b
## BOOLEAN
def op_and(b: bool, a: bool) -> bool: return b and a
def op_or(b: bool, a: bool) -> bool: return b or a
def op_same(b: bool, a: bool) -> bool: return b == a


METHODS = {
    'number': {
        'plus': op_add, 'minus': op_sub, 'times': op_mul, 'dividedBy': op_div,
        'equals': op_equal,
        'lessThan': op_lt, 'lessThanOrEqual': op_lte,
        'greaterThan': op_gt, 'greaterThanOrEqual': op_gte,
        'rangeExclusive': op_range_exclusive, 'rangeInclusive': op_range_inclusive,
    },
    'string': {
        'plus': op_concat,
    },
    'boolean': {
        'and': op_and, 'or': op_or, 'equals': op_same,
    },
}
