"""
Helpers shared by the ffmpeg diagnostic text grammars.

ffmpeg prefixes the messages of an input device with a context tag such as
``[dshow @ 000001c8e2a1b2c0]`` or ``[AVFoundation indev @ 0x7f8b1c004c00]``.
Everything interesting follows that tag.
"""

from typing import Iterable, List, NamedTuple, Optional

PREFIX_SEPARATOR = "] "


class DiagnosticLine(NamedTuple):
    """A diagnostic line with its context tag removed."""
    remainder: str  # text after the context tag
    leading: str    # remainder up to the first space
    trailing: str   # remainder after the first space


def split_diagnostic_line(line: str) -> Optional[DiagnosticLine]:
    """
    Split a raw stderr line into its leading token and trailing text.

    Returns None for lines without a context tag, or whose remainder has no
    space to split on. Such lines are framework noise to the grammars.
    """
    line = line.rstrip("\r\n")
    offset = line.find(PREFIX_SEPARATOR)
    if offset < 0:
        return None

    remainder = line[offset + len(PREFIX_SEPARATOR):]
    parts = remainder.split(" ", 1)
    if len(parts) != 2:
        return None

    return DiagnosticLine(remainder, parts[0], parts[1])


def parse_input_formats(lines: Iterable[str]) -> List[str]:
    """
    Parse ``ffmpeg -devices`` output into the names of its input devices.

    Example::

        Devices:
         D. = Demuxing supported
         .E = Muxing supported
         --
         D  avfoundation    AVFoundation input device
          E audiotoolbox    AudioToolbox output device
    """
    formats = []
    in_table = False
    for line in lines:
        stripped = line.strip()
        if not in_table:
            in_table = stripped.startswith("--")
            continue

        columns = stripped.split(None, 2)
        if len(columns) < 2 or "D" not in columns[0]:
            continue
        formats.append(columns[1])
    return formats
