"""
Reading model.xml out of a .dacpac archive.

A .dacpac is a zip file; the schema model is the ``model.xml`` entry.
"""

import zipfile
from pathlib import Path
from typing import Union

from dacpac_schema.exceptions import ArchiveError

MODEL_ENTRY = "model.xml"


def extract_model_xml(
    dacpac_path: Union[str, Path], entry: str = MODEL_ENTRY
) -> str:
    """Return the text of the model entry of a .dacpac file.

    Args:
        dacpac_path: Path to the .dacpac file.
        entry: Name of the entry to read.

    Returns:
        The entry decoded as UTF-8 (a leading byte order mark is dropped).

    Raises:
        ArchiveError: If the file is missing, is not a zip archive, lacks the
            entry, or the entry is not valid UTF-8.
    """
    path = str(dacpac_path)
    try:
        with zipfile.ZipFile(path) as archive:
            try:
                with archive.open(entry) as stream:
                    data = stream.read()
            except KeyError as e:
                raise ArchiveError(
                    f"Archive '{path}' has no '{entry}' entry", path, entry
                ) from e
    except FileNotFoundError as e:
        raise ArchiveError(f"File not found: {path}", path, entry) from e
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"'{path}' is not a valid .dacpac archive: {e}", path, entry) from e
    except OSError as e:
        raise ArchiveError(f"Unable to read '{path}': {e}", path, entry) from e

    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ArchiveError(f"Entry '{entry}' is not UTF-8 text: {e}", path, entry) from e
