"""
Tests for dashboard assembly and its degraded-source fallbacks
"""
import asyncio

import pytest

from aarohan.data.opportunities import SAMPLE_OPPORTUNITIES
from aarohan.models.opportunity import Opportunity
from aarohan.services.dashboard_service import DashboardService
from aarohan.services.eligibility_service import EligibilityService
from aarohan.services.errors import NotFoundError
from aarohan.services.matching_service import MatchingService

from conftest import NOW, FakeStore


class FixedClockEvaluator(EligibilityService):
    def evaluate(self, applicant, now=None):
        return super().evaluate(applicant, now or NOW)


class ProfileOutageStore(FakeStore):
    async def get_user(self, user_id):
        raise ConnectionError("users collection unavailable")


def dashboard(store):
    return DashboardService(store, MatchingService(use_llm=False), FixedClockEvaluator())


def add_user(store, applicant=None):
    user = {"name": "Asha Verma", "email": "asha@example.in", "skills": ["HTML", "CSS"]}
    if applicant is not None:
        user["applicant"] = applicant.model_dump(mode="json")
    return asyncio.run(store.create_user(user))


def test_dashboard_with_saved_applicant(store, make_applicant):
    user_id = add_user(store, make_applicant(skills=["HTML", "CSS"]))

    result = asyncio.run(dashboard(store).build_dashboard(user_id))

    assert result.name == "Asha Verma"
    assert result.skills_count == 2
    assert result.eligibility.is_eligible is True
    assert [o.id for o in result.opportunities] == [o.id for o in SAMPLE_OPPORTUNITIES]
    assert result.recommendations[0].internship_id == "sample-5"
    assert result.degraded_sources == []


def test_stored_catalog_is_preferred(store, make_applicant):
    store.opportunities = [Opportunity(id="stored-1", title="Lab Assistant", company="Clinic")]
    user_id = add_user(store, make_applicant())

    result = asyncio.run(dashboard(store).build_dashboard(user_id))

    assert [o.id for o in result.opportunities] == ["stored-1"]
    assert [r.internship_id for r in result.recommendations] == ["stored-1"]


def test_unknown_user(store):
    with pytest.raises(NotFoundError):
        asyncio.run(dashboard(store).build_dashboard("missing"))


def test_catalog_outage_uses_sample_catalog(store, make_applicant):
    store.fail_catalog = True
    user_id = add_user(store, make_applicant())

    result = asyncio.run(dashboard(store).build_dashboard(user_id))

    assert result.degraded_sources == ["opportunities"]
    assert len(result.opportunities) == len(SAMPLE_OPPORTUNITIES)


def test_without_applicant_uses_latest_history(store, make_applicant):
    user_id = add_user(store)
    evaluator = FixedClockEvaluator()
    asyncio.run(store.store_eligibility_result(user_id, evaluator.evaluate(make_applicant(family_income=900000))))
    asyncio.run(store.store_eligibility_result(user_id, evaluator.evaluate(make_applicant())))

    result = asyncio.run(dashboard(store).build_dashboard(user_id))

    assert result.eligibility.is_eligible is True
    assert result.recommendations == []


def test_profile_outage_is_degraded_not_fatal():
    store = ProfileOutageStore()

    result = asyncio.run(dashboard(store).build_dashboard("any-user"))

    assert result.degraded_sources == ["profile"]
    assert result.name is None
    assert result.eligibility is None
