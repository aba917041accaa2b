"""Enrollment code derivation."""

from app.models import Group

SEGMENT_LENGTH = 3
STUDENT_ID_WIDTH = 3


def _segment(name: str) -> str:
    return name[:SEGMENT_LENGTH].upper()


def generate_enrollment_code(
    session_name: str, level_name: str, group_name: str, student_id: int
) -> str:
    """Build an enrollment code like ``SES-NIV-GRP-007``.

    Name segments are the first three characters, upper-cased, and are not
    padded when a name is shorter. The student id is zero-padded to three
    digits and never truncated.
    """
    return "-".join(
        [
            _segment(session_name),
            _segment(level_name),
            _segment(group_name),
            str(student_id).zfill(STUDENT_ID_WIDTH),
        ]
    )


def enrollment_code_for_group(group: Group, student_id: int) -> str:
    """Build the enrollment code for a group with its level and session loaded."""
    return generate_enrollment_code(
        group.level.session.name, group.level.name, group.name, student_id
    )
