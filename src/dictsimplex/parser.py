"""
Reader and writer for the textual dictionary format.

Format:

    [Line 1]      m n
    [Line 2]      B_1 ... B_m        (basic variable indices)
    [Line 3]      N_1 ... N_n        (nonbasic variable indices)
    [Line 4]      b_1 ... b_m
    [Line 5]      a_11 ... a_1n
    ...
    [Line m + 4]  a_m1 ... a_mn
    [Line m + 5]  c_0 c_1 ... c_n
"""

import logging
from pathlib import Path
from typing import List, Union

from .containers import Matrix, Vector
from .data_models import DEFAULT_TOLERANCE, format_number
from .dictionary import Dictionary
from .errors import DictionaryFormatError

logger = logging.getLogger(__name__)


def _parse_ints(line: str, count: int, line_no: int, what: str) -> List[int]:
    tokens = line.split()
    if len(tokens) != count:
        raise DictionaryFormatError(f"expected {count} {what}, found {len(tokens)}", line_no)
    try:
        return [int(t) for t in tokens]
    except ValueError:
        raise DictionaryFormatError(f"{what} must be integers: {line.strip()!r}", line_no) from None


def _parse_floats(line: str, count: int, line_no: int, what: str) -> List[float]:
    tokens = line.split()
    if len(tokens) != count:
        raise DictionaryFormatError(f"expected {count} {what}, found {len(tokens)}", line_no)
    try:
        return [float(t) for t in tokens]
    except ValueError:
        raise DictionaryFormatError(f"{what} must be numbers: {line.strip()!r}", line_no) from None


def parse_dictionary(content: str, tolerance: float = DEFAULT_TOLERANCE) -> Dictionary:
    """
    Parse a dictionary from its textual form.

    Args:
        content: Text in the dictionary format
        tolerance: Sign-test tolerance of the returned dictionary

    Returns:
        The parsed Dictionary

    Raises:
        DictionaryFormatError: If the text does not follow the format
    """
    lines = content.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()

    if not lines:
        raise DictionaryFormatError("empty dictionary", 1)
    m, n = _parse_ints(lines[0], 2, 1, "dimensions (m n)")
    if m < 0 or n < 0:
        raise DictionaryFormatError(f"dimensions must be non-negative, got {m} {n}", 1)
    if len(lines) != m + 5:
        raise DictionaryFormatError(f"expected {m + 5} lines for m = {m}, found {len(lines)}")

    basic = _parse_ints(lines[1], m, 2, "basic variable indices")
    non_basic = _parse_ints(lines[2], n, 3, "nonbasic variable indices")
    b = _parse_floats(lines[3], m, 4, "entries of b")

    A = Matrix(m, n)
    for i in range(m):
        row = _parse_floats(lines[4 + i], n, 5 + i, f"entries in row {i + 1} of A")
        for j, value in enumerate(row):
            A.set(i, j, value)

    objective = _parse_floats(lines[m + 4], n + 1, m + 5, "objective entries (c_0 c_1 .. c_n)")

    return Dictionary.from_components(
        objective[0],
        Vector.from_array(objective[1:]),
        A,
        Vector.from_array(b),
        Vector.from_array(non_basic),
        Vector.from_array(basic),
        tolerance=tolerance,
    )


def format_dictionary(dictionary: Dictionary) -> str:
    """Render ``dictionary`` in the textual format, one trailing newline."""
    basic = dictionary.basic
    non_basic = dictionary.non_basic
    A = dictionary.A

    lines = [
        f"{basic.size()} {non_basic.size()}",
        " ".join(format_number(v) for v in basic),
        " ".join(format_number(v) for v in non_basic),
        " ".join(format_number(v) for v in dictionary.b),
    ]
    for i in range(A.rows()):
        lines.append(" ".join(format_number(v) for v in A.row(i)))
    lines.append(" ".join(format_number(v) for v in [dictionary.c0] + dictionary.c.as_list()))
    return "\n".join(lines) + "\n"


def read_dictionary(filepath: Union[str, Path], tolerance: float = DEFAULT_TOLERANCE) -> Dictionary:
    """
    Read a dictionary file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        DictionaryFormatError: If the file format is invalid
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    with open(filepath, 'r') as f:
        content = f.read()

    logger.debug(f"Parsing dictionary file: {filepath}")
    dictionary = parse_dictionary(content, tolerance=tolerance)
    logger.debug(f"Parsed {dictionary.basic.size()} basic, {dictionary.non_basic.size()} nonbasic variables")
    return dictionary


def write_dictionary(dictionary: Dictionary, filepath: Union[str, Path]) -> None:
    """Write ``dictionary`` to ``filepath``, creating parent folders as needed."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, 'w') as f:
        f.write(format_dictionary(dictionary))
    logger.debug(f"Wrote dictionary to {filepath}")
