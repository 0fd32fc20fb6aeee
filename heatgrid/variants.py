"""Assignment variants and a checker that looks for required MPI constructs."""

from __future__ import annotations

import argparse
import re
import sys
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Pattern, Sequence, Union

NUM_VARIANTS = 64


class VariantError(RuntimeError):
    """Raised when a variant is unknown or its requirements are not met."""


class SendType(Enum):
    SYNC = "`MPI_Send` et `MPI_Recv`"
    ASYNC = "`MPI_Isend` et `MPI_Irecv`"

    def __str__(self) -> str:
        return self.value


class MpiType(Enum):
    CONTIGUOUS = "`MPI_Type_contiguous`"
    VECTOR = "`MPI_Type_vector`"
    DOUBLE = "`MPI_DOUBLE`"
    STRUCT = "`MPI_Type_struct`"
    UNSIGNED = "`MPI_UNSIGNED`"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Borders:
    send_type: SendType
    north_south: MpiType
    east_west: MpiType


@dataclass(frozen=True)
class Parameters:
    send_type: SendType
    params_type: MpiType
    grid_type: MpiType


@dataclass(frozen=True)
class GridTransfer:
    send_type: SendType
    data_type: MpiType


@dataclass(frozen=True)
class Variant:
    parameters: Parameters
    borders: Borders
    grid: GridTransfer

    def __str__(self) -> str:
        return (
            "L'envoi/réception des grilles initiales doit être effectué avec "
            f"{self.parameters.send_type}\n"
            "Vous devez envoyer les paramètres `width`, `height` et `padding` "
            f"en une seule requête de type {self.parameters.params_type}\n"
            "Les données (`data`) de la grille doivent être envoyées en une "
            f"seule requête de type défini avec {self.parameters.grid_type}\n"
            f"\nL'échange des bordures doit être effectué avec {self.borders.send_type}\n"
            f"Les bordures nord et sud doivent être de type défini avec  {self.borders.north_south}\n"
            f"Les bordures est et ouest doivent être de type défini avec  {self.borders.east_west}\n"
            "\nL'envoi et la réception de la grille finale doit être effectué "
            f"avec {self.grid.send_type}\n"
            f"Les données (`data`) de la grille doivent être de type {self.grid.data_type}\n"
        )


def variant_requirements(number: int) -> Variant:
    """Return the requirements of variant ``number``, from 1 to 64."""
    bits = number - 1
    if not 0 <= bits < NUM_VARIANTS:
        raise VariantError(
            "Failed assertion, le numéro de variant ne correspond à aucune valeur connue"
        )

    def flag(bit: int) -> bool:
        return bool(bits & (1 << bit))

    return Variant(
        parameters=Parameters(
            send_type=SendType.ASYNC if flag(5) else SendType.SYNC,
            params_type=MpiType.STRUCT if flag(4) else MpiType.UNSIGNED,
            grid_type=MpiType.STRUCT,
        ),
        borders=Borders(
            send_type=SendType.ASYNC if flag(3) else SendType.SYNC,
            north_south=MpiType.DOUBLE if flag(2) else MpiType.CONTIGUOUS,
            east_west=MpiType.VECTOR,
        ),
        grid=GridTransfer(
            send_type=SendType.ASYNC if flag(1) else SendType.SYNC,
            data_type=MpiType.DOUBLE if flag(0) else MpiType.STRUCT,
        ),
    )


def count_matches(text: str, pattern: Union[str, Pattern[str]]) -> int:
    """Count the non-overlapping matches of ``pattern`` in ``text``."""
    return sum(1 for _ in re.finditer(pattern, text))


def _check(kind: str, value: Enum, expected: int, actual: int, message: str) -> None:
    if actual < expected:
        print(
            f"\n{kind} error for {value}\n\tExpected : {expected}, got {actual}",
            file=sys.stderr,
        )
        raise VariantError(f"Failed assertion, {message}")


def assert_variant(variant: Variant, path: Union[str, Path]) -> None:
    """Check that the source at ``path`` uses the constructs ``variant`` requires."""
    try:
        content = Path(path).read_text()
    except OSError as exc:
        raise VariantError(f"assertVariant() : Could not open file {path}") from exc

    expected_types = Counter(
        (
            variant.parameters.params_type,
            variant.parameters.grid_type,
            variant.borders.east_west,
            variant.borders.north_south,
            variant.grid.data_type,
        )
    )
    # Scalar types are reused to build composite types, so they are not counted.
    for mpi_type, pattern, message in (
        (MpiType.CONTIGUOUS, r"MPI_Type_contiguous", "Unexpected number of contiguous data types"),
        (MpiType.VECTOR, r"MPI_Type_vector", "Unexpected number of vector data types"),
        (MpiType.STRUCT, r"MPI_Type_create_struct", "Unexpected number of struct data types"),
    ):
        _check("Type", mpi_type, expected_types[mpi_type], count_matches(content, pattern), message)

    expected_sends = Counter(
        (variant.parameters.send_type, variant.borders.send_type, variant.grid.send_type)
    )
    for send_type, pattern, message in (
        (SendType.SYNC, r"MPI_Recv", "Unexpected number of MPI_Send/MPI_Recv"),
        (SendType.ASYNC, r"MPI_Irecv", "Unexpected number of MPI_Isend/MPI_Irecv"),
    ):
        _check("Sync", send_type, expected_sends[send_type], count_matches(content, pattern), message)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print a variant's requirements and check a lab directory against them."""
    parser = argparse.ArgumentParser(description="Check a lab against its variant.")
    parser.add_argument("-v", dest="variant", type=int, required=True,
                        metavar="variant", help="Variant number")
    parser.add_argument("-d", dest="directory", required=True,
                        metavar="dir", help="Lab directory")
    args = parser.parse_args(argv)

    path = f"{args.directory}/source/heatsim-mpi.c"
    try:
        requirements = variant_requirements(args.variant)
        print(requirements, end="")
        assert_variant(requirements, path)
    except VariantError as exc:
        print(exc, file=sys.stderr)
        return 1

    print("\n\nChecker OK")
    return 0