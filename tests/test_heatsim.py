from array import array

import pytest

from heatgrid.color import color_value
from heatgrid.grid import Grid
from heatgrid.heatsim import SimulationError, diffuse, load_image, run, save_image
from heatgrid.image import Image


def _write_png(path, width, height, red_of):
    image = Image(width, height)
    for j in range(height):
        for i in range(width):
            image[i, j] = (red_of(i, j), 0, 0, 255)
    image.save_png(path)
    return path


def test_diffuse_keeps_uniform_grid_uniform():
    current = Grid(4, 3, 1)
    current.fill(7.5)
    nxt = current.clone()
    nxt.fill(0.0)
    diffuse(current, nxt)
    assert all(nxt[i, j] == 7.5 for j in range(3) for i in range(4))


def test_diffuse_spreads_hot_cell_symmetrically_and_conserves_heat():
    current = Grid(3, 3, 1)
    current[1, 1] = 4.0
    nxt = current.clone()
    diffuse(current, nxt)
    neighbours = [nxt[1, 0], nxt[0, 1], nxt[2, 1], nxt[1, 2]]
    assert len(set(neighbours)) == 1
    assert nxt[0, 0] == nxt[2, 2] == 0.0
    total = sum(nxt[i, j] for j in range(3) for i in range(3))
    assert total == pytest.approx(4.0)


def test_diffuse_does_not_touch_padding_of_next():
    current = Grid(2, 2, 1)
    current.fill(3.0)
    nxt = Grid(2, 2, 1)
    nxt.fill(-1.0)
    diffuse(current, nxt)
    assert nxt.padded(0, 0) == -1.0
    assert nxt[-1, 0] == -1.0
    assert nxt[0, 0] == 3.0


def test_diffuse_rejects_mismatched_dimensions():
    with pytest.raises(SimulationError):
        diffuse(Grid(3, 3, 1), Grid(4, 3, 1))


def test_diffuse_rejects_grid_without_padding():
    with pytest.raises(SimulationError):
        diffuse(Grid(3, 3, 0), Grid(3, 3, 0))


def test_load_image_scales_red_channel_into_blocks(tmp_path):
    path = _write_png(tmp_path / "in.png", 5, 3, lambda i, j: 255 if i == 0 else 0)
    cart = load_image(path, 2, 2)
    assert (cart.grid_x_count, cart.grid_y_count) == (2, 2)
    assert (cart.total_width, cart.total_height) == (5, 3)
    grid = cart.to_grid()
    for j in range(3):
        assert grid[0, j] == 1000.0
        assert all(grid[i, j] == 0.0 for i in range(1, 5))


def test_load_image_missing_file(tmp_path):
    with pytest.raises(SimulationError):
        load_image(tmp_path / "absent.png", 1, 1)


def test_save_image_colours_cells_against_maximum(tmp_path):
    path = _write_png(tmp_path / "in.png", 4, 2, lambda i, j: 255 if (i + j) % 2 else 0)
    cart = load_image(path, 2, 1)
    grid = cart.to_grid()
    out = tmp_path / "out.png"
    save_image(out, cart)
    saved = Image.from_png(out)
    assert (saved.width, saved.height) == (4, 2)
    maximum = grid.max()
    for j in range(2):
        for i in range(4):
            assert saved[i, j] == color_value(grid[i, j], maximum)


def test_run_with_no_iterations_keeps_the_input_heat(tmp_path):
    path = _write_png(tmp_path / "in.png", 6, 4, lambda i, j: 255 if i < 3 else 0)
    out = tmp_path / "out.png"
    run(path, out, 2, 2, 0)
    expected = Image.from_grid(load_image(path, 1, 1).to_grid())
    assert Image.from_png(out).pixels == expected.pixels


def test_run_on_uniform_image_stays_uniform(tmp_path):
    path = _write_png(tmp_path / "in.png", 5, 5, lambda i, j: 255)
    out = tmp_path / "out.png"
    run(path, out, 2, 3, 4)
    pixels = Image.from_png(out).pixels
    assert set(pixels) == {color_value(1000.0, 1000.0)}


@pytest.mark.parametrize("dims", [(2, 2), (3, 1), (1, 3), (5, 3)])
def test_run_result_does_not_depend_on_decomposition(tmp_path, dims):
    path = _write_png(tmp_path / "in.png", 5, 3, lambda i, j: 255 if (i * j + i) % 3 == 0 else 0)
    single = tmp_path / "single.png"
    split = tmp_path / "split.png"
    run(path, single, 1, 1, 3)
    run(path, split, *dims, 3)
    assert Image.from_png(split).pixels == Image.from_png(single).pixels


def test_run_reports_each_iteration_of_each_rank(tmp_path, capsys):
    path = _write_png(tmp_path / "in.png", 4, 4, lambda i, j: 255 if i == j else 0)
    run(path, tmp_path / "out.png", 2, 1, 2)
    lines = capsys.readouterr().out.splitlines()
    assert "[0] iteration 1 of 2 done" in lines
    assert "[1] iteration 2 of 2 done" in lines
    assert sum("iteration" in line for line in lines) == 4


def test_run_missing_input(tmp_path):
    with pytest.raises(SimulationError):
        run(tmp_path / "absent.png", tmp_path / "out.png", 1, 1, 1)


def test_run_rejects_non_positive_dimensions(tmp_path):
    path = _write_png(tmp_path / "in.png", 2, 2, lambda i, j: 0)
    with pytest.raises(SimulationError):
        run(path, tmp_path / "out.png", 0, 1, 1)


def test_diffuse_row_matches_cellwise_stencil():
    current = Grid(3, 2, 1)
    current.data[:] = array("d", range(len(current.data)))
    nxt = current.clone()
    diffuse(current, nxt)
    for j in range(2):
        for i in range(3):
            c = current[i, j]
            neighbours = current[i, j + 1] + current[i + 1, j] + current[i, j - 1] + current[i - 1, j]
            assert nxt[i, j] == pytest.approx(c + 0.25 * (neighbours - 4 * c))