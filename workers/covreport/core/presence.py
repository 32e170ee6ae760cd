"""
Static-presence scanner — find instrumentation ids that survived
compilation.

Production instrumentation rewrites each point into a call such as
``ist_arr.push('Cx')``.  Scanning the compiled binary for these calls
tells which points the optimizer kept.
"""
from __future__ import annotations

import logging
import re
from typing import Set

logger = logging.getLogger(__name__)


def _push_pattern(array_name: str) -> re.Pattern:
    # Array name is literal text; the id is the shortest quoted argument.
    return re.compile(re.escape(array_name) + r"""\.push\(['"](.*?)['"]\)""")


def scan_presence(program_text: str, array_name: str) -> Set[str]:
    """
    Collect ids pushed into *array_name* anywhere in *program_text*.

    Either quote style is accepted.  Empty input yields an empty set.
    """
    if not program_text or not array_name:
        return set()

    found = {m.group(1) for m in _push_pattern(array_name).finditer(program_text)}
    logger.debug("found %d distinct ids pushed to %s", len(found), array_name)
    return found
