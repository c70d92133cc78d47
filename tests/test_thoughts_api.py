"""
Happy Thoughts API - Thought Endpoint Tests
=============================================

What:  Drives the /thoughts endpoints through the FastAPI app against a
       temporary SQLite database.

What we test:
    ✅ Listing: envelope, pagination window, total count, filters, sorting
    ✅ Bad hearts/sort/id parameters → 400
    ✅ Numbers beyond the column range are clamped, never a 500
    ✅ Get by id: found, missing (404), malformed (400)
    ✅ Create: auth required, message trimmed and length-checked
    ✅ Like/unlike arithmetic, hearts never negative
    ✅ Owner-only delete and message edit
    ✅ Sign-up → sign-in → post → like → delete walkthrough
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from happy_thoughts.models.thought import SEED_USER_ID, Thought

pytestmark = pytest.mark.asyncio

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def _auth(user):
    return {"Authorization": f"Bearer {user['accessToken']}"}


@pytest_asyncio.fixture
async def seeded(db_session):
    """
    Fifteen thoughts, one hour apart; hearts = index % 6.
    Messages alternate between "Sunny ..." and "Rainy ..." days.
    """
    thoughts = []
    for i in range(15):
        thought = Thought(
            message=f"{'Sunny' if i % 2 == 0 else 'Rainy'} day number {i}",
            hearts=i % 6,
            created_at=BASE_TIME + timedelta(hours=i),
            user_id=SEED_USER_ID,
        )
        db_session.add(thought)
        thoughts.append(thought)
    await db_session.commit()
    return thoughts


async def _create(client, user, message="hello world"):
    response = await client.post("/thoughts", json={"message": message}, headers=_auth(user))
    assert response.status_code == 201, response.text
    return response.json()["response"]


class TestListThoughts:

    async def test_default_page(self, test_client, seeded):
        response = await test_client.get("/thoughts")
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        page = body["response"]
        assert page["totalResults"] == 15
        assert page["currentPage"] == 1
        assert page["resultsPerPage"] == 10
        assert len(page["thoughts"]) == 10
        assert set(page["thoughts"][0]) == {"id", "message", "hearts", "createdAt", "userId"}

    async def test_last_page_is_partial(self, test_client, seeded):
        page = (await test_client.get("/thoughts?page=2")).json()["response"]
        assert page["currentPage"] == 2
        assert page["resultsPerPage"] == 5

    async def test_page_past_the_end_is_empty(self, test_client, seeded):
        page = (await test_client.get("/thoughts?page=9&limit=5")).json()["response"]
        assert page["thoughts"] == []
        assert page["totalResults"] == 15

    @pytest.mark.parametrize("page,limit", [(1, 1), (1, 4), (2, 4), (4, 4), (3, 7), (1, 50)])
    async def test_window_bounds_and_stable_total(self, test_client, seeded, page, limit):
        result = (
            await test_client.get(f"/thoughts?page={page}&limit={limit}")
        ).json()["response"]
        assert result["resultsPerPage"] <= limit
        assert result["resultsPerPage"] == len(result["thoughts"])
        assert result["totalResults"] == 15

    async def test_pages_do_not_overlap(self, test_client, seeded):
        first = (await test_client.get("/thoughts?limit=4&sort=hearts")).json()["response"]
        second = (await test_client.get("/thoughts?page=2&limit=4&sort=hearts")).json()["response"]
        first_ids = {t["id"] for t in first["thoughts"]}
        second_ids = {t["id"] for t in second["thoughts"]}
        assert not first_ids & second_ids

    async def test_non_numeric_page_and_limit_fall_back(self, test_client, seeded):
        page = (await test_client.get("/thoughts?page=abc&limit=xyz")).json()["response"]
        assert page["currentPage"] == 1
        assert page["resultsPerPage"] == 10

    async def test_huge_hearts_matches_nothing(self, test_client, seeded):
        response = await test_client.get("/thoughts?hearts=99999999999999999999")
        assert response.status_code == 200
        page = response.json()["response"]
        assert page["totalResults"] == 0
        assert page["thoughts"] == []

    async def test_huge_limit_returns_everything(self, test_client, seeded):
        response = await test_client.get("/thoughts?limit=99999999999999999999")
        assert response.status_code == 200
        page = response.json()["response"]
        assert page["totalResults"] == 15
        assert page["resultsPerPage"] == 15

    async def test_huge_page_is_empty(self, test_client, seeded):
        response = await test_client.get("/thoughts?page=99999999999999999999")
        assert response.status_code == 200
        page = response.json()["response"]
        assert page["thoughts"] == []
        assert page["totalResults"] == 15

    @pytest.mark.parametrize("threshold", [0, 1, 3, 5])
    async def test_hearts_filter(self, test_client, seeded, threshold):
        page = (await test_client.get(f"/thoughts?hearts={threshold}&limit=50")).json()["response"]
        expected = sum(1 for i in range(15) if i % 6 >= threshold)
        assert page["totalResults"] == expected
        assert all(t["hearts"] >= threshold for t in page["thoughts"])

    @pytest.mark.parametrize("value", ["abc", "lots", "1e3"])
    async def test_non_numeric_hearts(self, test_client, seeded, value):
        response = await test_client.get(f"/thoughts?hearts={value}")
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Invalid 'hearts' parameter. Must be a number."

    async def test_message_search_is_case_insensitive(self, test_client, seeded):
        page = (await test_client.get("/thoughts?message=SUNNY&limit=50")).json()["response"]
        assert page["totalResults"] == 8
        assert all("sunny" in t["message"].lower() for t in page["thoughts"])

    async def test_message_search_treats_wildcards_literally(self, test_client, seeded):
        page = (await test_client.get("/thoughts", params={"message": "%"})).json()["response"]
        assert page["totalResults"] == 0

    async def test_id_filter(self, test_client, seeded):
        target = seeded[3]
        page = (await test_client.get(f"/thoughts?id={target.id}")).json()["response"]
        assert page["totalResults"] == 1
        assert page["thoughts"][0]["id"] == str(target.id)

    async def test_malformed_id_filter(self, test_client, seeded):
        response = await test_client.get("/thoughts?id=nope")
        assert response.status_code == 400

    async def test_sort_created_at_newest_first(self, test_client, seeded):
        newest = (await test_client.get("/thoughts?sort=createdAt&limit=50")).json()["response"]
        alias = (await test_client.get("/thoughts?sort=createdAt_desc&limit=50")).json()["response"]
        assert newest["thoughts"] == alias["thoughts"]
        assert newest["thoughts"][0]["message"] == "Sunny day number 14"

    async def test_sort_created_at_oldest_first(self, test_client, seeded):
        page = (await test_client.get("/thoughts?sort=createdAt_asc&limit=50")).json()["response"]
        assert page["thoughts"][0]["message"] == "Sunny day number 0"
        assert page["thoughts"][-1]["message"] == "Sunny day number 14"

    async def test_sort_hearts_most_first(self, test_client, seeded):
        page = (await test_client.get("/thoughts?sort=hearts&limit=50")).json()["response"]
        hearts = [t["hearts"] for t in page["thoughts"]]
        assert hearts == sorted(hearts, reverse=True)

    async def test_unsorted_order_is_deterministic(self, test_client, seeded):
        first = (await test_client.get("/thoughts?limit=50")).json()["response"]
        second = (await test_client.get("/thoughts?limit=50")).json()["response"]
        assert first["thoughts"] == second["thoughts"]

    async def test_unknown_sort(self, test_client, seeded):
        response = await test_client.get("/thoughts?sort=popular")
        assert response.status_code == 400
        assert "createdAt_asc" in response.json()["message"]


class TestGetThought:

    async def test_found(self, test_client, seeded):
        target = seeded[0]
        response = await test_client.get(f"/thoughts/{target.id}")
        assert response.status_code == 200
        thought = response.json()["response"]
        assert thought["message"] == target.message
        assert thought["userId"] == str(SEED_USER_ID)

    async def test_not_found(self, test_client, db_tables):
        response = await test_client.get(f"/thoughts/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json()["success"] is False

    async def test_malformed_id(self, test_client, db_tables):
        response = await test_client.get("/thoughts/12345")
        assert response.status_code == 400
        assert response.json()["response"][0]["field"] == "thought_id"


class TestCreateThought:

    async def test_requires_token(self, test_client):
        response = await test_client.post("/thoughts", json={"message": "hello world"})
        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized: No access token provided."

    async def test_created_with_owner_and_zero_hearts(self, test_client, signup):
        user = await signup()
        thought = await _create(test_client, user, "  hello world  ")
        assert thought["message"] == "hello world"
        assert thought["hearts"] == 0
        assert thought["userId"] == user["id"]

    @pytest.mark.parametrize("message", ["hey", "   hi    ", "x" * 141, ""])
    async def test_message_length_enforced(self, test_client, signup, message):
        user = await signup()
        response = await test_client.post(
            "/thoughts", json={"message": message}, headers=_auth(user)
        )
        assert response.status_code == 400
        assert response.json()["response"][0]["field"] == "message"

    async def test_boundary_lengths_accepted(self, test_client, signup):
        user = await signup()
        assert (await _create(test_client, user, "x" * 5))["message"] == "x" * 5
        assert (await _create(test_client, user, "y" * 140))["message"] == "y" * 140


class TestLikes:

    async def test_like_twice_adds_two(self, test_client, signup):
        user = await signup()
        thought = await _create(test_client, user)
        await test_client.patch(f"/thoughts/{thought['id']}/like")
        response = await test_client.patch(f"/thoughts/{thought['id']}/like")
        assert response.status_code == 200
        assert response.json()["response"]["hearts"] == 2

    async def test_like_needs_no_token(self, test_client, seeded):
        response = await test_client.patch(f"/thoughts/{seeded[0].id}/like")
        assert response.status_code == 200
        assert response.json()["response"]["hearts"] == 1

    async def test_like_missing_thought(self, test_client, db_tables):
        response = await test_client.patch(f"/thoughts/{uuid.uuid4()}/like")
        assert response.status_code == 404

    async def test_like_malformed_id(self, test_client, db_tables):
        response = await test_client.patch("/thoughts/not-an-id/like")
        assert response.status_code == 400

    async def test_unlike_at_zero_stays_zero(self, test_client, signup):
        user = await signup()
        thought = await _create(test_client, user)
        response = await test_client.patch(
            f"/thoughts/{thought['id']}", json={"unlike": True}, headers=_auth(user)
        )
        assert response.status_code == 200
        assert response.json()["response"]["hearts"] == 0

    async def test_any_signed_in_user_can_unlike(self, test_client, signup):
        owner = await signup(name="owner")
        other = await signup(name="other")
        thought = await _create(test_client, owner)
        await test_client.patch(f"/thoughts/{thought['id']}/like")
        response = await test_client.patch(
            f"/thoughts/{thought['id']}", json={"unlike": True}, headers=_auth(other)
        )
        assert response.status_code == 200
        assert response.json()["response"]["hearts"] == 0


class TestUpdateThought:

    async def test_owner_edits_message(self, test_client, signup):
        user = await signup()
        thought = await _create(test_client, user)
        response = await test_client.patch(
            f"/thoughts/{thought['id']}",
            json={"message": "  an edited thought "},
            headers=_auth(user),
        )
        assert response.status_code == 200
        assert response.json()["response"]["message"] == "an edited thought"

    async def test_other_user_cannot_edit_message(self, test_client, signup):
        owner = await signup(name="owner")
        other = await signup(name="other")
        thought = await _create(test_client, owner)
        response = await test_client.patch(
            f"/thoughts/{thought['id']}",
            json={"message": "hijacked thought", "unlike": True},
            headers=_auth(other),
        )
        assert response.status_code == 403
        stored = (await test_client.get(f"/thoughts/{thought['id']}")).json()["response"]
        assert stored["message"] == "hello world"

    async def test_empty_update_returns_unchanged(self, test_client, signup):
        user = await signup()
        thought = await _create(test_client, user)
        response = await test_client.patch(
            f"/thoughts/{thought['id']}", json={}, headers=_auth(user)
        )
        assert response.status_code == 200
        assert response.json()["response"] == thought

    async def test_short_message_rejected(self, test_client, signup):
        user = await signup()
        thought = await _create(test_client, user)
        response = await test_client.patch(
            f"/thoughts/{thought['id']}", json={"message": "hi"}, headers=_auth(user)
        )
        assert response.status_code == 400

    async def test_requires_token(self, test_client, seeded):
        response = await test_client.patch(f"/thoughts/{seeded[0].id}", json={"unlike": True})
        assert response.status_code == 401

    async def test_missing_thought(self, test_client, signup):
        user = await signup()
        response = await test_client.patch(
            f"/thoughts/{uuid.uuid4()}", json={"unlike": True}, headers=_auth(user)
        )
        assert response.status_code == 404


class TestDeleteThought:

    async def test_requires_token(self, test_client, seeded):
        response = await test_client.delete(f"/thoughts/{seeded[0].id}")
        assert response.status_code == 401

    async def test_other_user_forbidden(self, test_client, signup):
        owner = await signup(name="owner")
        other = await signup(name="other")
        thought = await _create(test_client, owner)
        response = await test_client.delete(f"/thoughts/{thought['id']}", headers=_auth(other))
        assert response.status_code == 403
        assert (await test_client.get(f"/thoughts/{thought['id']}")).status_code == 200

    async def test_missing_thought(self, test_client, signup):
        user = await signup()
        response = await test_client.delete(f"/thoughts/{uuid.uuid4()}", headers=_auth(user))
        assert response.status_code == 404

    async def test_owner_deletes(self, test_client, signup):
        user = await signup()
        thought = await _create(test_client, user)
        response = await test_client.delete(f"/thoughts/{thought['id']}", headers=_auth(user))
        assert response.status_code == 200
        assert response.json()["response"]["id"] == thought["id"]
        assert (await test_client.get(f"/thoughts/{thought['id']}")).status_code == 404


class TestWalkthrough:

    async def test_full_lifecycle(self, test_client, signup):
        created = await test_client.post(
            "/users", json={"name": "a", "email": "a@x.com", "password": "secret123"}
        )
        assert created.status_code == 201
        user = created.json()["response"]
        assert user["accessToken"]

        session = await test_client.post(
            "/sessions", json={"email": "a@x.com", "password": "secret123"}
        )
        assert session.status_code == 200
        assert session.json()["response"]["id"] == user["id"]

        thought = await _create(test_client, user, "hello world")
        assert thought["hearts"] == 0

        liked = await test_client.patch(f"/thoughts/{thought['id']}/like")
        assert liked.json()["response"]["hearts"] == 1

        stranger = await signup(name="b", email="b@x.com")
        denied = await test_client.delete(f"/thoughts/{thought['id']}", headers=_auth(stranger))
        assert denied.status_code == 403

        deleted = await test_client.delete(f"/thoughts/{thought['id']}", headers=_auth(user))
        assert deleted.status_code == 200

        gone = await test_client.get(f"/thoughts/{thought['id']}")
        assert gone.status_code == 404
