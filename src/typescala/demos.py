## typescala — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Example programs with their expected results, used by `typescala demo` and the test-suite.
#

from typing import Any
from dataclasses import dataclass

from .types import Kind


@dataclass(frozen=True)
class DemoScript:
    id: str
    label: str
    description: str
    code: str
    expected: Any = None
    expected_kind: Kind | None = None


MANDELBROT = """let width = 60
let height = 40
let maxIterations = 40

let image = canvas(width, height)

for py in 0..height {
  let imaginary = (py / height) * 2.4 - 1.2
  for px in 0..width {
    let real = (px / width) * 3.5 - 2.5
    let zx = 0
    let zy = 0
    let iteration = 0
    let escaped = false
    let escapeCount = maxIterations

    while(() => iteration < maxIterations, () => {
      let xSquared = zx * zx
      let ySquared = zy * zy

      if (xSquared + ySquared > 4) {
        escaped = true
        escapeCount = iteration
        iteration = maxIterations
      } else {
        let twoXY = zx * zy * 2
        let nextX = xSquared - ySquared + real
        zy = twoXY + imaginary
        zx = nextX
        iteration = iteration + 1
      }
    })

    if (escaped) {
      let intensity = (escapeCount / maxIterations) * 255
      setPixel(image, px, py, intensity, intensity, intensity)
    } else {
      setPixel(image, px, py, 0, 0, 0)
    }
  }
}

image"""


DEMO_SCRIPTS: tuple[DemoScript, ...] = (
    DemoScript(
        id='fibonacci',
        label='Recursive Fibonacci',
        description='Computes the sixth Fibonacci number using a classic recursive definition.',
        code="""let fib = (n) => {
  if (n <= 1) {
    n
  } else {
    fib(n - 1) + fib(n - 2)
  }
}

fib(6)""",
        expected=8.0,
    ),
    DemoScript(
        id='factorial',
        label='Factorial',
        description='Uses recursion to calculate 5! (factorial of five).',
        code="""let factorial = (n) => {
  if (n <= 1) {
    1
  } else {
    n * factorial(n - 1)
  }
}

factorial(5)""",
        expected=120.0,
    ),
    DemoScript(
        id='range-sum',
        label='Range Summation',
        description='Adds the numbers from one through ten with a for-loop and inclusive range.',
        code="""let total = 0

for number in 1...10 {
  total = total + number
}

total""",
        expected=55.0,
    ),
    DemoScript(
        id='closure-counter',
        label='Closure Counter',
        description='Captures a mutable binding inside a closure and increments it twice.',
        code="""let makeCounter = (start) => {
  let current = start
  () => {
    current = current + 1
    current
  }
}

let counter = makeCounter(5)
counter()
counter()""",
        expected=7.0,
    ),
    DemoScript(
        id='while-doubling',
        label='While Loop Doubling',
        description='Doubles a value five times using the built-in while helper.',
        code="""let counter = 0
let value = 1

while(() => counter < 5, () => {
  counter = counter + 1
  value = value * 2
  value
})

value""",
        expected=32.0,
    ),
    DemoScript(
        id='mandelbrot-canvas',
        label='Mandelbrot Canvas',
        description='Plots the Mandelbrot set into a canvas using the native drawing helpers.',
        code=MANDELBROT,
        expected_kind='pixelBuffer',
    ),
)


def find_demo(id: str) -> DemoScript | None:
    return next((d for d in DEMO_SCRIPTS if d.id == id), None)
