"""
Tests for the multi-step application form
"""
import pytest

from aarohan.services.application_form import ApplicationForm, STEPS, validate_field
from aarohan.services.errors import InputValidationError

from conftest import NOW, born_years_ago

form = ApplicationForm()


def complete_fields(**overrides):
    fields = {
        "full_name": "Ravi Kumar",
        "email": "ravi@example.in",
        "phone": "9876543210",
        "date_of_birth": born_years_ago(23).isoformat(),
        "gender": "male",
        "address": "Nagpur, Maharashtra 440001",
        "category": "obc",
        "differently_abled": False,
        "bank_account_seeded": True,
        "citizenship_confirmed": True,
        "qualification": "diploma",
        "education_status": "not_enrolled",
        "employment_status": "part_time",
        "family_income": "350000",
        "premium_institute_graduate": False,
        "advanced_degree_holder": False,
        "govt_training_enrolled": False,
        "family_govt_employee": False,
        "skills": ["Electrical wiring", "MS Excel"],
        "languages": ["Hindi", "Marathi"],
        "certifications": [],
        "experience": "Assisted a local electrician on residential wiring jobs for a year.",
    }
    fields.update(overrides)
    return fields


def test_six_steps_with_hindi_titles():
    assert [step.title for step in STEPS] == [
        "Basic Details", "Category & Status", "Education", "Employment", "Exclusion Check", "Skills"
    ]
    assert all(step.title_hindi for step in STEPS)


def test_basic_details_errors():
    validation = form.validate_step({"full_name": "A", "email": "ravi.example.in", "phone": "98765"}, 0, now=NOW)

    assert validation.is_valid is False
    assert validation.errors == {
        "full_name": "Name is required (minimum 2 characters)",
        "email": "Valid email is required",
        "phone": "Valid 10-digit phone number is required",
        "date_of_birth": "Date of birth is required",
        "gender": "gender is required",
        "address": "Complete address is required",
    }


def test_select_messages_replace_first_underscore():
    assert validate_field("employment_status", "") == "employment status is required"
    assert validate_field("education_status", None) == "education status is required"


@pytest.mark.parametrize("value,message", [
    (born_years_ago(19).isoformat(), "Age must be between 21-24 years for PM Internship Scheme"),
    (born_years_ago(27).isoformat(), "Age must be between 21-24 years for PM Internship Scheme"),
    ("31/02/2001", "Date of birth is not a valid date"),
    (born_years_ago(22).isoformat(), None),
])
def test_date_of_birth_rules(value, message):
    assert validate_field("date_of_birth", value, now=NOW) == message


@pytest.mark.parametrize("value,message", [
    ("", "Valid family income is required"),
    ("lots", "Valid family income is required"),
    (-10, "Valid family income is required"),
    (800000, "Family income must be less than Rs 8,00,000 for eligibility"),
    ("799999.50", None),
])
def test_family_income_rules(value, message):
    assert validate_field("family_income", value) == message


def test_experience_and_citizenship_rules():
    assert validate_field("experience", "Helper") == (
        "Please provide a detailed description of your experience (minimum 20 characters)"
    )
    assert validate_field("citizenship_confirmed", False) == "Indian citizenship confirmation is required"
    assert validate_field("citizenship_confirmed", True) is None


def test_unknown_step_is_rejected():
    with pytest.raises(InputValidationError):
        form.validate_step({}, 6)


def test_next_step_stays_put_when_invalid():
    state = form.new_state({"full_name": "Ravi Kumar"})
    moved = form.next_step(state, now=NOW)

    assert moved.current_step == 0
    assert "email" in moved.validation.errors
    assert state.validation.errors == {}


def test_walk_through_every_step():
    state = form.new_state(complete_fields())
    visited = [state.current_step]
    for _ in range(len(STEPS) + 2):
        state = form.next_step(state, now=NOW)
        visited.append(state.current_step)

    assert visited[:6] == [0, 1, 2, 3, 4, 5]
    assert state.current_step == form.last_step
    assert form.progress(state) == 100


def test_previous_step_clamps_at_first():
    state = form.new_state(complete_fields())
    state = form.next_step(state, now=NOW)
    state = form.previous_step(state)
    state = form.previous_step(state)

    assert state.current_step == 0
    assert form.progress(state) == pytest.approx(100 / 6)


def test_update_field_clears_only_that_error():
    state = form.next_step(form.new_state({}), now=NOW)
    updated = form.update_field(state, "email", "ravi@example.in")

    assert "email" not in updated.validation.errors
    assert "phone" in updated.validation.errors
    assert updated.fields["email"] == "ravi@example.in"
    assert "email" in state.validation.errors


def test_to_applicant_builds_record():
    applicant = form.to_applicant(form.new_state(complete_fields()), now=NOW)

    assert applicant.qualification == "diploma"
    assert applicant.family_income == 350000
    assert applicant.skills == ["Electrical wiring", "MS Excel"]


def test_to_applicant_collects_messages_across_steps():
    state = form.new_state(complete_fields(phone="12", family_income=950000, citizenship_confirmed=False))

    with pytest.raises(InputValidationError) as exc_info:
        form.to_applicant(state, now=NOW)

    assert exc_info.value.messages == [
        "phone: Valid 10-digit phone number is required",
        "citizenship_confirmed: Indian citizenship confirmation is required",
        "family_income: Family income must be less than Rs 8,00,000 for eligibility",
    ]
