"""
Multi-step application form: step definitions, per-field rules and navigation
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..models.applicant import Applicant
from ..models.form import FormState, FormStep, StepValidation
from ..utils.validators import parse_date, parse_income, validate_email, validate_phone
from .eligibility_service import INCOME_LIMIT, MAX_AGE, MIN_AGE, Moment, compute_age
from .errors import InputValidationError

logger = logging.getLogger(__name__)

STEPS: List[FormStep] = [
    FormStep(
        title="Basic Details",
        title_hindi="बुनियादी विवरण",
        fields=["full_name", "email", "phone", "date_of_birth", "gender", "address"]
    ),
    FormStep(
        title="Category & Status",
        title_hindi="श्रेणी और स्थिति",
        fields=["category", "differently_abled", "bank_account_seeded"]
    ),
    FormStep(
        title="Education",
        title_hindi="शिक्षा",
        fields=["citizenship_confirmed", "qualification", "education_status"]
    ),
    FormStep(
        title="Employment",
        title_hindi="रोजगार",
        fields=["employment_status", "family_income"]
    ),
    FormStep(
        title="Exclusion Check",
        title_hindi="बहिष्करण जांच",
        fields=["premium_institute_graduate", "advanced_degree_holder", "govt_training_enrolled", "family_govt_employee"]
    ),
    FormStep(
        title="Skills",
        title_hindi="कौशल",
        fields=["skills", "languages", "certifications", "experience"]
    ),
]

REQUIRED_SELECTS = ("gender", "category", "qualification", "employment_status", "education_status")


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_field(field: str, value: Any, now: Optional[Moment] = None) -> Optional[str]:
    """Error message for a single field, None when it is acceptable"""
    if field == "full_name":
        if _blank(value) or len(str(value).strip()) < 2:
            return "Name is required (minimum 2 characters)"
    elif field == "email":
        if _blank(value) or not validate_email(str(value)):
            return "Valid email is required"
    elif field == "phone":
        if _blank(value) or not validate_phone(str(value)):
            return "Valid 10-digit phone number is required"
    elif field == "date_of_birth":
        if _blank(value):
            return "Date of birth is required"
        born = parse_date(value)
        if born is None:
            return "Date of birth is not a valid date"
        age = compute_age(born, now)
        if age < MIN_AGE or age > MAX_AGE:
            return "Age must be between 21-24 years for PM Internship Scheme"
    elif field in REQUIRED_SELECTS:
        if _blank(value):
            return f"{field.replace('_', ' ', 1)} is required"
    elif field == "family_income":
        income = None if _blank(value) else parse_income(value)
        if income is None:
            return "Valid family income is required"
        if income >= INCOME_LIMIT:
            return "Family income must be less than Rs 8,00,000 for eligibility"
    elif field == "citizenship_confirmed":
        if not value:
            return "Indian citizenship confirmation is required"
    elif field == "address":
        if _blank(value) or len(str(value).strip()) < 10:
            return "Complete address is required"
    elif field == "experience":
        if _blank(value) or len(str(value).strip()) < 20:
            return "Please provide a detailed description of your experience (minimum 20 characters)"
    return None


class ApplicationForm:
    """Navigation over the form steps; every operation returns a new FormState"""

    def __init__(self, steps: Optional[List[FormStep]] = None):
        self.steps = steps or STEPS

    @property
    def last_step(self) -> int:
        return len(self.steps) - 1

    def new_state(self, initial: Optional[Dict[str, Any]] = None) -> FormState:
        return FormState(current_step=0, fields=dict(initial or {}))

    def update_field(self, state: FormState, field: str, value: Any) -> FormState:
        """Set a field and clear any error recorded for it"""
        errors = {name: message for name, message in state.validation.errors.items() if name != field}
        return state.model_copy(update={
            "fields": {**state.fields, field: value},
            "validation": state.validation.model_copy(update={"errors": errors})
        })

    def validate_step(
        self,
        fields: Dict[str, Any],
        step_index: int,
        now: Optional[Moment] = None
    ) -> StepValidation:
        if step_index < 0 or step_index > self.last_step:
            raise InputValidationError([f"Unknown step: {step_index}"])

        errors = {}
        for field in self.steps[step_index].fields:
            message = validate_field(field, fields.get(field), now)
            if message:
                errors[field] = message
        return StepValidation(step_index=step_index, errors=errors)

    def next_step(self, state: FormState, now: Optional[Moment] = None) -> FormState:
        """Advance only when the current step validates; stays on the last step"""
        validation = self.validate_step(state.fields, state.current_step, now)
        current = state.current_step
        if validation.is_valid:
            current = min(current + 1, self.last_step)
        return state.model_copy(update={"current_step": current, "validation": validation})

    def previous_step(self, state: FormState) -> FormState:
        current = max(state.current_step - 1, 0)
        return state.model_copy(update={
            "current_step": current,
            "validation": StepValidation(step_index=current)
        })

    def progress(self, state: FormState) -> float:
        return (state.current_step + 1) / len(self.steps) * 100

    def to_applicant(self, state: FormState, now: Optional[Moment] = None) -> Applicant:
        """
        Validate every step and build the applicant

        Raises:
            InputValidationError: with one message per invalid field
        """
        messages = []
        for index in range(len(self.steps)):
            validation = self.validate_step(state.fields, index, now)
            messages.extend(f"{field}: {message}" for field, message in validation.errors.items())
        if messages:
            raise InputValidationError(messages)

        try:
            return Applicant(**state.fields)
        except ValidationError as e:
            raise InputValidationError([
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
            ])


# Global application form instance
application_form = ApplicationForm()
