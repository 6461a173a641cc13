## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Native global functions.  Every `op_` function here is bound in a fresh runtime environment
# under its camelCase name, e.g. `op_set_pixel` as `setPixel`.
#

import math
from typing import Any

from .types import Function, PixelBuffer, is_truthy, null
from .errors import CanvasDimensionError, OutOfBoundsError
from .formatting import format_value


def _channel(value: float) -> int:
    """Clamp to [0, 255] then round half up, the way colour channels are stored."""
    if math.isnan(value): return 0
    return math.floor(min(255.0, max(0.0, value)) + 0.5)

def _coordinate(value: float, limit: int) -> int:
    if not math.isfinite(value) or not (0 <= (index := math.floor(value)) < limit):
        raise OutOfBoundsError("setPixel coordinate is out of bounds")
    return index


## INPUT/OUTPUT
def op_print(*values: Any) -> None:
    print(' '.join(format_value(v) for v in values))

## CONTROL FLOW
def op_while(condition: Function, body: Function) -> Any:
    """Call `body` for as long as `condition` returns something truthy; yields the last body result."""
    result = null
    while is_truthy(condition.call([])):
        result = body.call([])
    return result

## PIXEL BUFFERS
def op_canvas(width: float, height: float) -> PixelBuffer:
    if not (math.isfinite(width) and math.isfinite(height)) or math.floor(width) <= 0 or math.floor(height) <= 0:
        raise CanvasDimensionError("canvas width and height must be positive integers")
    return PixelBuffer.create(math.floor(width), math.floor(height))

def op_canvas_width(image: PixelBuffer) -> float: return float(image.width)
def op_canvas_height(image: PixelBuffer) -> float: return float(image.height)

def op_fill_canvas(image: PixelBuffer, r: float, g: float, b: float, a: float = 255.0) -> PixelBuffer:
    rgba = bytes((_channel(r), _channel(g), _channel(b), _channel(a)))
    image.pixels[:] = rgba * (image.width * image.height)
    return image

def op_set_pixel(image: PixelBuffer, x: float, y: float, r: float, g: float, b: float, a: float = 255.0) -> PixelBuffer:
    i = image.offset(_coordinate(x, image.width), _coordinate(y, image.height))
    image.pixels[i:i+4] = bytes((_channel(r), _channel(g), _channel(b), _channel(a)))
    return image
