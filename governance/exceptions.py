from typing import Iterable, List

from governance.models.validated_parameters import FieldError


class GovernanceError(Exception):
    """Base class for every error raised by the proposal core."""


class ValidationError(GovernanceError):
    """One or more fields failed validation; all failures are carried together."""

    def __init__(self, template_id: str, errors: Iterable[FieldError]):
        self.template_id = template_id
        self.errors: List[FieldError] = list(errors)
        details = "; ".join(str(error) for error in self.errors)
        super().__init__(f"Invalid parameters for template '{template_id}': {details}")

    def as_dict(self) -> dict:
        return {error.field_id: error.message for error in self.errors}


class InvalidInput(GovernanceError):
    """Ledger-level input rejected (empty title, description or action)."""


class NotFound(GovernanceError):
    pass


class TemplateNotFound(NotFound):
    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Template '{template_id}' does not exist")


class ProposalNotFound(NotFound):
    def __init__(self, proposal_id: int):
        self.proposal_id = proposal_id
        super().__init__(f"Proposal does not exist: {proposal_id}")


class Unauthorized(GovernanceError):
    pass


class AlreadyExecuted(GovernanceError):
    pass


class EncodingError(GovernanceError):
    """Parameters cannot be encoded for the requested template."""


class TransientSubmissionError(GovernanceError):
    """
    Raised by a broadcasting collaborator for failures worth retrying
    (dropped connection, node behind, nonce race). Never raised by the core.
    """


class EncodingFallback(UserWarning):
    """
    Not an error: the template was not recognized and the parameters were
    encoded as raw UTF-8 JSON text instead of ABI call data.
    """
