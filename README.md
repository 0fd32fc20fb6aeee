# heatgrid

`heatgrid` simulates heat spreading across an image. It reads the red channel
of a PNG, weighted by its alpha, as a temperature field and scales it by 1000.
The field is cut into a cartesian arrangement of blocks, `dim-x` by `dim-y`,
that is periodic in both directions. On every iteration each block:

1. swaps its outermost rows and columns with its four neighbours,
2. raises every cell that has fallen below its starting temperature back to
   that temperature,
3. takes one step of a five-point diffusion stencil.

When the run ends the blocks are put back together and the result is saved as
a false-colour PNG.

## Installation

```
pip install .
```

Add the `test` extra to get the test dependencies:

```
pip install ".[test]"
```

## Running a simulation

```
heatgrid --input plate.png --output plate-hot.png --iterations 200 --dim-x 2 --dim-y 3
```

| Option            | Meaning                              | Default              |
|-------------------|--------------------------------------|----------------------|
| `--iterations N`  | number of iterations to perform      | `110`                |
| `--dim-x N`       | number of blocks along X             | `1`                  |
| `--dim-y N`       | number of blocks along Y             | `1`                  |
| `--input FILE`    | input image (required)               |                      |
| `--output FILE`   | output image                         | `<input>.output.png` |
| `--help`          | show the help text and exit          |                      |

Numeric options must be positive integers. An unknown option, an option
without its argument, a number that is not positive or a missing `--input`
prints a short message and ends with exit status 1. So does a failure to read
or write an image.

The command prints the configuration first. It then reports progress for each
block, numbered by rank: its neighbours, its size, and every iteration it
finishes.

Output colours run from blue (cold) through cyan, green and yellow to red and
magenta (hot). They are relative to the hottest cell of the final field. Cells
beyond the top of the scale come out white, and NaN cells come out black.

## Using the library

```python
from heatgrid.grid import Grid
from heatgrid.cart import Cart2D
from heatgrid.heatsim import diffuse

field = Grid(64, 48, 0)
field.fill(0.0)
field[32, 24] = 1000.0

cart = Cart2D.from_grid(field, 2, 2)   # four blocks
whole = cart.to_grid()                 # and back again

current = field.clone_with_padding(1)
current.set_padding_from_inner_bound()
nxt = current.clone()
diffuse(current, nxt)
print(nxt.max())
```

The modules:

- `heatgrid.grid`: `Grid` holds a 2-D field of floats with an optional border
  of padding cells. `grid[i, j]` accepts negative indices, and indices past
  the edge, to reach into the padding. `padded`/`set_padded` address cells
  from the padded corner. It also provides copying (`clone`,
  `clone_with_padding`, `copy_data_to`, `copy_block`, `copy_inner_border_to`),
  `fill`, `multiply`, `raise_to`, `set_padding_from_inner_bound`, `max` and
  `dump`. Mismatched sizes raise `GridError`.
- `heatgrid.cart`: `Cart2D` splits a field into blocks whose sizes differ by
  at most one cell, with the larger blocks first. `split_dimension` and
  `offsets_of` give that layout. `from_grid`, `to_grid` and `pad` convert
  between the blocks and a whole grid.
- `heatgrid.color`: `color_value(value, maximum)` maps a value to an RGBA
  tuple.
- `heatgrid.image`: `Image` covers PNG loading (`from_png`) and saving
  (`save_png`), `from_grid` to colour a field, and `to_grid(channel)` to read
  one channel weighted by alpha. Failures raise `ImageError`.
- `heatgrid.topology`: `CartTopology` is the periodic arrangement of ranks.
  Ranks are numbered in row-major order of (x, y) with y varying fastest.
  `RankInfo` gives each rank's coordinates and its north, south, east and west
  neighbours. The simulation steps are `scatter_grids`, `exchange_borders` and
  `gather_results`.
- `heatgrid.heatsim`: `diffuse` is one stencil step. `load_image`,
  `save_image` and `run` make up the full simulation that the `heatgrid`
  command uses. Failures raise `SimulationError`.

## Checking a variant

A lab directory can be checked against one of the 64 communication variants:

```
heatgrid-check-variant -v 12 -d path/to/lab
```

This prints what the variant requires. It then counts the datatype
constructors and receive calls in `source/heatsim-mpi.c` under the given
directory. If a count falls short, it reports the shortfall and exits with
status 1. Otherwise it prints `Checker OK`. The same check is available as
`variant_requirements` and `assert_variant` in `heatgrid.variants`.

## What it does not do

All blocks run one after another in a single Python process. Every "rank" is
a grid kept in a list, and every exchange between ranks is a copy in memory.
Nothing is spread over several processes or machines, so more blocks do not
make a run faster.