import pytest

from heatgrid.variants import (
    NUM_VARIANTS,
    MpiType,
    SendType,
    VariantError,
    assert_variant,
    count_matches,
    main,
    variant_requirements,
)

VARIANT_ONE_SOURCE = (
    "MPI_Type_contiguous\nMPI_Type_vector\n"
    "MPI_Type_create_struct\nMPI_Type_create_struct\n"
    "MPI_Recv\nMPI_Recv\nMPI_Recv\n"
)


def _lab(tmp_path, content):
    source = tmp_path / "source"
    source.mkdir()
    (source / "heatsim-mpi.c").write_text(content)
    return tmp_path


def test_first_variant_has_all_bits_clear():
    v = variant_requirements(1)
    assert v.grid.data_type is MpiType.STRUCT
    assert v.grid.send_type is SendType.SYNC
    assert v.borders.north_south is MpiType.CONTIGUOUS
    assert v.borders.send_type is SendType.SYNC
    assert v.parameters.params_type is MpiType.UNSIGNED
    assert v.parameters.send_type is SendType.SYNC


def test_last_variant_has_all_bits_set():
    v = variant_requirements(NUM_VARIANTS)
    assert v.grid.data_type is MpiType.DOUBLE
    assert v.grid.send_type is SendType.ASYNC
    assert v.borders.north_south is MpiType.DOUBLE
    assert v.borders.send_type is SendType.ASYNC
    assert v.parameters.params_type is MpiType.STRUCT
    assert v.parameters.send_type is SendType.ASYNC


@pytest.mark.parametrize("number", range(1, NUM_VARIANTS + 1))
def test_constant_requirements(number):
    v = variant_requirements(number)
    assert v.parameters.grid_type is MpiType.STRUCT
    assert v.borders.east_west is MpiType.VECTOR


def test_variant_two_only_changes_grid_type():
    assert variant_requirements(2).grid.data_type is MpiType.DOUBLE
    assert variant_requirements(2).grid.send_type is SendType.SYNC


@pytest.mark.parametrize("number", [0, NUM_VARIANTS + 1, -3])
def test_unknown_variant_raises(number):
    with pytest.raises(VariantError):
        variant_requirements(number)


def test_variant_text_names_types():
    first = str(variant_requirements(1))
    last = str(variant_requirements(NUM_VARIANTS))
    assert "`MPI_UNSIGNED`" in first
    assert "`MPI_Send` et `MPI_Recv`" in first
    assert "`MPI_Isend` et `MPI_Irecv`" in last
    assert "`MPI_Isend`" not in first


def test_count_matches():
    assert count_matches("MPI_Recv x MPI_Recv", "MPI_Recv") == 2
    assert count_matches("MPI_Irecv", "MPI_Recv") == 0


def test_assert_variant_missing_struct(tmp_path):
    path = tmp_path / "heatsim-mpi.c"
    path.write_text(VARIANT_ONE_SOURCE.replace("MPI_Type_create_struct\n", "", 1))
    with pytest.raises(VariantError, match="struct data types"):
        assert_variant(variant_requirements(1), path)


def test_assert_variant_missing_async(tmp_path):
    path = tmp_path / "heatsim-mpi.c"
    path.write_text(VARIANT_ONE_SOURCE)
    with pytest.raises(VariantError, match="MPI_Isend/MPI_Irecv"):
        assert_variant(variant_requirements(NUM_VARIANTS), path)


def test_assert_variant_missing_file(tmp_path):
    with pytest.raises(VariantError, match="Could not open file"):
        assert_variant(variant_requirements(1), tmp_path / "absent.c")


def test_main_accepts_matching_lab(tmp_path, capsys):
    lab = _lab(tmp_path, VARIANT_ONE_SOURCE)
    assert main(["-v", "1", "-d", str(lab)]) == 0
    out = capsys.readouterr().out
    assert "Checker OK" in out
    assert str(variant_requirements(1)) in out


def test_main_rejects_lab_missing_constructs(tmp_path):
    lab = _lab(tmp_path, "MPI_Recv\n")
    assert main(["-v", "1", "-d", str(lab)]) == 1


def test_main_requires_options():
    with pytest.raises(SystemExit):
        main(["-v", "1"])