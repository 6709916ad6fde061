"""Speaker role classification.

Maps the free-text calling shown with a talk to a coarse governing-body tag.
The tag reflects the calling at the time of the talk; it is never derived
from a speaker's later or current calling.
"""

from gc_podcast.models import RoleTag

_FIRST_PRESIDENCY_MARKERS = ("president of the church", "the first presidency")
_COUNSELOR_MARKERS = ("first counselor", "second counselor")
_QUORUM_MARKERS = (
    "quorum of the twelve",
    "twelve apostles",
    "acting president of the quorum",
    "president of the quorum",
)


def classify_role(calling: str | None) -> str | None:
    """Classify a calling into a role tag.

    "First Counselor" on its own also appears in auxiliary presidencies, so
    counselors only count as First Presidency when the text names it.

    During a First Presidency vacancy the President of the Quorum of the
    Twelve presides but is not in the First Presidency; the calling text
    then names the Quorum and classifies as such.

    Args:
        calling: Calling text, e.g. "Of the Quorum of the Twelve Apostles"

    Returns
    -------
        RoleTag.FIRST_PRESIDENCY, RoleTag.QUORUM_OF_THE_TWELVE or None
    """
    if not calling:
        return None

    text = calling.lower()

    if any(marker in text for marker in _FIRST_PRESIDENCY_MARKERS) or (
        any(marker in text for marker in _COUNSELOR_MARKERS)
        and "first presidency" in text
    ):
        return RoleTag.FIRST_PRESIDENCY

    if any(marker in text for marker in _QUORUM_MARKERS):
        return RoleTag.QUORUM_OF_THE_TWELVE

    return None
