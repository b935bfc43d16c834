from typing import Any, List, Mapping, Tuple

from governance.exceptions import InvalidInput
from governance.models.proposal_draft import ProposalAction, SubmissionRequest
from governance.service.action_encoder import ActionEncoder, action_encoder
from governance.service.field_validator import FieldValidator, field_validator
from governance.templates.template_catalog import TemplateCatalog, catalog
from utils.logger_utils import get_logger

logger = get_logger("Proposal Builder")


class ProposalBuilder:
    """
    A proposal being drafted: title, description and an ordered list of
    validated, encoded actions.

    The registry stores a single call-data payload per proposal, so the
    submission carries the first action's encoding.
    """

    def __init__(
        self,
        template_catalog: TemplateCatalog = catalog,
        validator: FieldValidator = field_validator,
        encoder: ActionEncoder = action_encoder,
    ):
        self._catalog = template_catalog
        self._validator = validator
        self._encoder = encoder
        self.title = ""
        self.description = ""
        self._actions: List[ProposalAction] = []
        self._next_action_id = 1

    @property
    def actions(self) -> Tuple[ProposalAction, ...]:
        return tuple(self._actions)

    def add_action(self, template_id: str, parameters: Mapping[str, Any]) -> ProposalAction:
        """
        Validates and encodes one action, then appends it to the draft.

        Raises:
            TemplateNotFound: The template id is not in the catalog.
            ValidationError: With every field error of the parameter set.
        """
        template = self._catalog.template_by_id(template_id)
        validated = self._validator.validate(template, parameters)
        encoded = self._encoder.encode(template.id, validated)

        action = ProposalAction(
            id=str(self._next_action_id),
            template_id=template.id,
            template_name=template.name,
            parameters=dict(parameters),
            encoded=encoded,
        )
        self._next_action_id += 1
        self._actions.append(action)
        logger.debug(f"Added action {action.id} ({template.id}) to draft")
        return action

    def remove_action(self, action_id: str) -> None:
        remaining = [action for action in self._actions if action.id != action_id]
        if len(remaining) == len(self._actions):
            raise KeyError(f"No action with id {action_id}")
        self._actions = remaining

    def can_submit(self) -> bool:
        return self.title.strip() != "" and self.description.strip() != "" and len(self._actions) > 0

    def to_submission(self, proposer: str) -> SubmissionRequest:
        """
        Raises:
            InvalidInput: If the draft is missing a title, a description or an action.
        """
        if not self.can_submit():
            raise InvalidInput("Proposal needs a title, a description and at least one action")
        return SubmissionRequest(
            proposer=proposer,
            title=self.title,
            description=self.description,
            encoded_action=self._actions[0].encoded.data,
        )
