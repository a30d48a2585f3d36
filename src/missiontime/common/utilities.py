"""Various helper functions that are used across multiple modules."""

from __future__ import annotations

# Standard Library Imports
import json

# Local Imports
from .logger import missiontimeLogError


def loadJSONFile(file_name):
    """Load in a JSON file into a Python dictionary.

    Args:
        file_name (``str``): name of JSON file to load

    Raises:
        ``FileNotFoundError``: helps with debugging bad filenames
        ``json.decoder.JSONDecodeError``: error parsing JSON file (bad syntax)
        ``IOError``: valid JSON file is empty

    Returns:
        ``dict``: documents loaded from the JSON file
    """
    try:
        with open(file_name, encoding="utf-8") as input_file:
            json_data = json.load(input_file)
    except FileNotFoundError as err:
        missiontimeLogError(f"Could not find JSON file: {file_name}")
        raise err
    except json.decoder.JSONDecodeError as err:
        missiontimeLogError(f"Decoding error reading JSON file: {file_name}")
        raise err

    if not json_data:
        msg = f"Empty JSON file: {file_name}"
        missiontimeLogError(msg)
        raise OSError(msg)

    return json_data


def loadDatFile(file_name, delim=None, comment="#"):
    """Load the corresponding dat file.

    Note:
        Assumes all data is representable by ``float``. Blank lines and lines starting with
        `comment` are skipped.

    Args:
        file_name (``str``): name of dat file to load
        delim (``str``, optional): delimiter character to separate data on same line. Defaults to
            ``None``, which removes all whitespace between values.
        comment (``str``, optional): prefix marking a comment line. Defaults to ``"#"``.

    Raises:
        ``FileNotFoundError``: helps with debugging bad filenames
        ``ValueError``: error parsing dat file, likely because values aren't convertible to ``float``
        ``IOError``: valid dat file is empty

    Returns:
        ``list``: nested list of float values of each row
    """
    try:
        with open(file_name, encoding="utf-8") as data_file:
            data = [
                [float(x) for x in line.split(sep=delim)]
                for line in data_file
                if line.strip() and not line.lstrip().startswith(comment)
            ]
    except FileNotFoundError as err:
        missiontimeLogError(f"Could not find DAT file: {file_name}")
        raise err
    except ValueError as err:
        msg = f"Parsing error reading DAT file: {file_name}"
        missiontimeLogError(msg)
        raise ValueError(msg) from err

    if not data:
        msg = f"Empty DAT file: {file_name}"
        missiontimeLogError(msg)
        raise OSError(msg)

    return data
