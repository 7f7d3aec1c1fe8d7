"""Domain errors raised by the assignment engine.

Configuration gaps found during automatic matching are NOT errors: they are
reported as unassigned outcomes. These exceptions cover a caller passing bad
input and an operator issuing an explicit command that cannot be honoured.
"""


class AssignmentError(Exception):
    """Base error. ``status_code`` is the HTTP status the API layer returns."""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAssignmentRequestError(AssignmentError):
    """Raised when a precondition on the call itself is violated."""

    status_code = 400


class ReportNotFoundError(AssignmentError):
    status_code = 404

    def __init__(self, report_id: int):
        super().__init__(f"Report ID {report_id} not found")
        self.report_id = report_id


class AuthorityNotFoundError(AssignmentError):
    status_code = 404

    def __init__(self, authority_id: int):
        super().__init__(f"Authority ID {authority_id} not found")
        self.authority_id = authority_id


class CrossCityReassignmentError(AssignmentError):
    status_code = 400


class InactiveAuthorityError(AssignmentError):
    status_code = 400
