"""
AppleScript generation for Keynote.

Image and destination paths come from user-chosen filenames, so every one of
them goes through :func:`quote_applescript_string` before it is placed in the
script. Nothing else in the script is derived from user input.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def quote_applescript_string(text: str) -> str:
    """
    Return ``text`` as a double-quoted AppleScript string literal.

    Backslashes and double quotes are escaped; line breaks and tabs use their
    escape sequences so the literal stays on one line. Spaces and non-ASCII
    characters are kept as-is; osascript reads the script as UTF-8.
    """
    return '"' + "".join(_ESCAPES.get(char, char) for char in text) + '"'


def _posix(path: Path | str) -> str:
    return os.path.abspath(os.fspath(path))


def build_keynote_script(
    image_paths: Sequence[Path | str],
    destination_path: Path | str,
    app_name: str = "Keynote",
) -> str:
    """
    Build the script that turns ``image_paths`` into a Keynote deck.

    The first image goes on the new document's existing first slide; every
    other image gets a slide appended at the end. Each image is stretched to
    the slide size at the origin, then the document is saved to
    ``destination_path``. Keynote is not activated.
    """
    if not image_paths:
        raise ValueError("At least one image path is required")

    image_list = ", ".join(quote_applescript_string(_posix(p)) for p in image_paths)
    output_path = quote_applescript_string(_posix(destination_path))
    app = quote_applescript_string(app_name)

    return f"""set imageList to {{{image_list}}}
set outputPath to {output_path}

tell application {app}
    set theDoc to make new document

    set slideWidth to width of theDoc
    set slideHeight to height of theDoc

    repeat with i from 1 to count of imageList
        set imagePath to item i of imageList
        set imageFile to (POSIX file imagePath) as alias

        if i is 1 then
            set currentSlide to slide 1 of theDoc
        else
            set currentSlide to make new slide at end of slides of theDoc
        end if

        tell currentSlide
            set theImage to make new image with properties {{file:imageFile}}
            set width of theImage to slideWidth
            set height of theImage to slideHeight
            set position of theImage to {{0, 0}}
        end tell
    end repeat

    save theDoc in POSIX file outputPath
end tell
"""
