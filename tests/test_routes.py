"""
HTTP tests for the API routes, with in-memory services behind them
"""
import pytest
from fastapi.testclient import TestClient

import aarohan.routes.application as application_routes
import aarohan.routes.dashboard as dashboard_routes
import aarohan.routes.eligibility as eligibility_routes
import aarohan.routes.recommendations as recommendation_routes
import aarohan.routes.users as user_routes
from aarohan.main import app
from aarohan.services.conversation_service import ConversationService
from aarohan.services.dashboard_service import DashboardService
from aarohan.services.matching_service import MatchingService
from aarohan.services.profile_service import ProfileService

from conftest import born_years_ago, eligible_fields


@pytest.fixture
def client(store, llm, monkeypatch):
    matcher = MatchingService(use_llm=False)
    monkeypatch.setattr(eligibility_routes, "mongo_service", store)
    monkeypatch.setattr(application_routes, "mongo_service", store)
    monkeypatch.setattr(recommendation_routes, "mongo_service", store)
    monkeypatch.setattr(recommendation_routes, "matching_service", matcher)
    monkeypatch.setattr(user_routes, "profile_service", ProfileService(store, llm))
    monkeypatch.setattr(user_routes, "conversation_service", ConversationService(store, llm))
    monkeypatch.setattr(dashboard_routes, "dashboard_service", DashboardService(store, matcher))
    # No context manager: the lifespan would try to reach MongoDB
    return TestClient(app)


def applicant_json(**overrides):
    fields = eligible_fields(date_of_birth=born_years_ago(22).isoformat())
    fields.update(overrides)
    return fields


def register(client, llm, email="asha@example.in"):
    llm.text_replies.append("Motivated web learner.")
    response = client.post("/profile", json={
        "name": "Asha Verma", "email": email, "password": "change-me",
        "skills": ["HTML", "CSS"], "careerGoals": "Front-end developer"
    })
    assert response.status_code == 201
    return response.json()["user_id"]


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "version" in response.json()


def test_health_without_database(client):
    body = client.get("/health").json()
    assert body["status"] == "degraded"
    assert body["database"] is False


def test_evaluate_eligible(client):
    response = client.post("/eligibility/evaluate", json=applicant_json())

    assert response.status_code == 200
    body = response.json()
    assert body["is_eligible"] is True
    assert body["eligibility_score"] == 100


def test_evaluate_high_income(client):
    body = client.post("/eligibility/evaluate", json=applicant_json(family_income=900000)).json()

    assert body["failed_criteria"] == ["Family income exceeds ₹8,00,000 annually"]
    assert body["eligibility_score"] == 86


@pytest.mark.parametrize("override", [
    {"family_income": -5},
    {"family_income": "lots"},
    {"date_of_birth": "14/05/2002"},
    {"qualification": ""},
])
def test_evaluate_rejects_malformed_input(client, override):
    assert client.post("/eligibility/evaluate", json=applicant_json(**override)).status_code == 422


def test_match_with_supplied_catalog(client):
    response = client.post("/recommendations/match", json={
        "applicant": applicant_json(skills=["Excel"]),
        "opportunities": [
            {"id": f"opp-{i}", "title": f"Role {i}", "company": "Acme", "skills_required": ["Excel"] if i == 3 else []}
            for i in range(7)
        ]
    })

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 5
    assert body[0]["internship_id"] == "opp-3"


def test_match_falls_back_to_sample_catalog(client):
    body = client.post("/recommendations/match", json={"applicant": applicant_json()}).json()
    assert {rec["internship_id"] for rec in body} <= {f"sample-{i}" for i in range(1, 6)}
    assert len(body) == 5


def test_list_opportunities_when_catalog_unreachable(client, store):
    store.fail_catalog = True
    body = client.get("/recommendations/opportunities").json()
    assert len(body) == 5


def test_registration_validation_messages(client):
    response = client.post("/profile", json={"email": "asha@example.in"})

    assert response.status_code == 400
    assert response.json() == {
        "messages": ["Name is a required field.", "Password is a required field.", "Atleast one skill is required"],
        "success": False
    }


def test_registration_duplicate_and_summary_failure(client, llm):
    register(client, llm)

    duplicate = client.post("/profile", json={
        "name": "Asha", "email": "ASHA@example.in", "password": "x", "skills": ["HTML"]
    })
    assert duplicate.status_code == 400
    assert duplicate.json()["message"] == "user already exists"

    failed = client.post("/profile", json={
        "name": "Ravi", "email": "ravi@example.in", "password": "x", "skills": ["Excel"]
    })
    assert failed.status_code == 500
    assert failed.json() == {"message": "User not registered successfully", "success": False}


def test_profile_round_trip(client, llm):
    user_id = register(client, llm)

    profile = client.get("/profile", params={"user_id": user_id}).json()
    assert profile["user_profile_summary"] == "Motivated web learner."
    assert "password_hash" not in profile

    assert client.get("/profile", params={"user_id": "missing"}).status_code == 404


def test_conversation_flow(client, llm):
    user_id = register(client, llm)
    conversation_id = client.get("/start-conversation", params={"user_id": user_id}).json()["conversationId"]

    llm.text_replies.append("Namaste! Tell me about your goals.")
    reply = client.post("/post-message", json={"conversationId": conversation_id, "message": "Hi"})
    assert reply.status_code == 200
    assert reply.json() == {"reply": "Namaste! Tell me about your goals."}

    failed = client.post("/post-message", json={"conversationId": conversation_id, "message": "Still there?"})
    assert failed.status_code == 502

    llm.json_replies.append({
        "title": "Getting started", "summary": "Introductions.",
        "updatedMasterSummary": "New user.", "aiCareerAnalysis": "Early stage."
    })
    ended = client.post("/end-conversation", json={"conversationId": conversation_id})
    assert ended.json() == {"title": "Getting started", "summary": "Introductions."}

    listing = client.get("/conversations", params={"user_id": user_id}).json()
    assert listing[0]["title"] == "Getting started"
    assert listing[0]["message_count"] == 3


def test_post_message_unknown_conversation(client):
    response = client.post("/post-message", json={"conversationId": "missing", "message": "Hi"})
    assert response.status_code == 404


def test_career_advice(client, llm):
    assert client.post("/get-advice", json={}).status_code == 400

    llm.text_replies.append("1. Web developer")
    response = client.post("/get-advice", json={"profile_text": "BCA graduate"})
    assert response.json() == {"advice": "1. Web developer"}


def test_saved_applicant_evaluation_history(client, llm):
    user_id = register(client, llm)
    assert client.post(f"/eligibility/user/{user_id}/evaluate").status_code == 400

    saved = client.put(f"/profile/{user_id}/applicant", json=applicant_json())
    assert saved.status_code == 200

    record = client.post(f"/eligibility/user/{user_id}/evaluate").json()
    assert record["result"]["is_eligible"] is True

    history = client.get(f"/eligibility/user/{user_id}/history").json()
    assert history["total_checks"] == 1
    assert client.post("/eligibility/user/missing/evaluate").status_code == 404


def test_application_steps_and_validation(client):
    steps = client.get("/application/steps").json()
    assert len(steps) == 6

    invalid = client.post("/application/validate-step", json={
        "step_index": 3, "fields": {"employment_status": "unemployed", "family_income": 900000}
    }).json()
    assert invalid["is_valid"] is False
    assert invalid["next_step"] == 3
    assert invalid["errors"] == {"family_income": "Family income must be less than Rs 8,00,000 for eligibility"}

    valid = client.post("/application/validate-step", json={
        "step_index": 3, "fields": {"employment_status": "unemployed", "family_income": 300000}
    }).json()
    assert valid["is_valid"] is True
    assert valid["next_step"] == 4

    assert client.post("/application/validate-step", json={"step_index": 9}).status_code == 400


def test_application_submit(client, llm, store):
    fields = {
        "full_name": "Ravi Kumar",
        "email": "ravi@example.in",
        "phone": "9876543210",
        "date_of_birth": born_years_ago(22).isoformat(),
        "gender": "male",
        "address": "Nagpur, Maharashtra 440001",
        "category": "obc",
        "citizenship_confirmed": True,
        "qualification": "iti",
        "education_status": "not_enrolled",
        "employment_status": "unemployed",
        "family_income": 250000,
        "experience": "Two years of part-time work at a mobile repair shop.",
    }
    user_id = register(client, llm)

    response = client.post("/application/submit", json={"fields": fields, "user_id": user_id})
    assert response.status_code == 200
    assert response.json()["is_eligible"] is True
    assert store.users[user_id]["applicant"]["qualification"] == "iti"
    assert len(store.results) == 1

    incomplete = client.post("/application/submit", json={"fields": {**fields, "phone": ""}})
    assert incomplete.status_code == 400
    assert incomplete.json()["detail"] == ["phone: Valid 10-digit phone number is required"]

    missing_user = client.post("/application/submit", json={"fields": fields, "user_id": "missing"})
    assert missing_user.status_code == 404


def test_dashboard(client, llm):
    user_id = register(client, llm)
    client.put(f"/profile/{user_id}/applicant", json=applicant_json(skills=["HTML", "CSS"]))

    body = client.get(f"/dashboard/{user_id}").json()
    assert body["name"] == "Asha Verma"
    assert body["eligibility"]["is_eligible"] is True
    assert len(body["recommendations"]) == 5

    assert client.get("/dashboard/missing").status_code == 404


def test_registration_response_shape(client, llm):
    llm.text_replies.append("Summary")
    response = client.post("/profile", json={
        "name": "Meera", "email": "meera@example.in", "password": "pw", "skills": ["Tally"]
    })

    body = response.json()
    assert response.status_code == 201
    assert set(body) == {"message", "success", "user_id"}
    assert body["message"] == "User registered successfully"
    assert body["success"] is True


def test_match_rejects_unknown_category(client):
    response = client.post("/recommendations/match", json={
        "applicant": applicant_json(),
        "opportunities": [{"id": "x-1", "title": "Role", "company": "Acme", "category": "astrology"}]
    })
    assert response.status_code == 422
