"""
Exceptions raised by twowaymap.
"""


class InvariantError(RuntimeError):
    """
    Internal consistency violation.

    Raised when the two indices of a map disagree, or when a shared cell is
    unwrapped while another owner still references it. These are defects in
    the container, never conditions a caller is expected to recover from.
    """
