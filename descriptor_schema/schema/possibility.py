"""
Undefined-possibility analysis.

Answers whether a descriptor is exclusively "absent" (True), can never be
absent (False), or may be absent among other values (None, meaning unknown).
The schema transformer uses this to cut `X | undefined` down to `X` at the top
level, where absence is expressed as optionality instead of as a schema branch.
"""

import logging
from typing import Any, Optional

from descriptor_schema.descriptors.types import UNDEFINED

logger = logging.getLogger(__name__)

# True: always absent, False: never absent, None: unknown
UndefinedPossibility = Optional[bool]


def get_undefined_possibility(descriptor: Any) -> UndefinedPossibility:
    """
    Determine whether a descriptor represents an absent value.

    Args:
        descriptor: Descriptor to inspect

    Returns:
        True for the UNDEFINED literal (possibly behind constraints), False if
        the descriptor rejects UNDEFINED, None if it accepts UNDEFINED among
        other values or no answer can be given

    Example:
        ```python
        get_undefined_possibility(literal(UNDEFINED))                  # True
        get_undefined_possibility(StringDescriptor())                  # False
        get_undefined_possibility(union(StringDescriptor(), literal())) # None
        ```
    """
    tag = getattr(descriptor, "tag", None)
    if tag == "literal" and descriptor.value is UNDEFINED:
        return True
    if tag == "constraint":
        return get_undefined_possibility(descriptor.underlying)

    validate = getattr(descriptor, "validate", None)
    if validate is None:
        return None
    try:
        outcome = validate(UNDEFINED)
    except Exception as e:
        # Custom constraints may not expect UNDEFINED; that proves nothing
        logger.debug("Probing %r with UNDEFINED raised %s", descriptor, e)
        return None
    return None if outcome.success else False
