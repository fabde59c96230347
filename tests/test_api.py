"""HTTP API tests: routing, identity header, clock and error bodies."""
import pytest
import pytest_asyncio

from dao_service.core.config import settings
from dao_service.schemas.proposal import MAX_AMOUNT

from conftest import ALICE, BOB, CAROL, T0, WEEK

API = "/api/v1"


def as_(principal):
    return {settings.principal_header: principal}


async def _create_org(client, owner=ALICE, name="Treasury Guild"):
    response = await client.post(f"{API}/organizations", json={"name": name}, headers=as_(owner))
    assert response.status_code == 201
    return response.json()


async def _create_proposal(client, org_id, owner=BOB, **fields):
    payload = {"title": "New servers", "amount_requested": 100, "organization_id": org_id, **fields}
    response = await client.post(f"{API}/proposals", json=payload, headers=as_(owner))
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def org_with_member(async_client):
    org = await _create_org(async_client)
    response = await async_client.post(
        f"{API}/organizations/{org['id']}/members", json={"principal": BOB}, headers=as_(ALICE)
    )
    assert response.status_code == 200
    return response.json()


class TestScenario:

    @pytest.mark.asyncio
    async def test_vote_and_finalize(self, async_client, clock, org_with_member):
        org_id = org_with_member["id"]
        assert org_with_member["members"] == [BOB]

        proposal = await _create_proposal(async_client, org_id)
        assert proposal["owner"] == BOB
        assert proposal["deadline"] == T0 + WEEK
        pid = proposal["id"]

        response = await async_client.post(f"{API}/proposals/{pid}/upvote", headers=as_(ALICE))
        assert response.status_code == 200
        assert response.json()["upvotes"] == [ALICE]

        response = await async_client.post(f"{API}/proposals/{pid}/upvote", headers=as_(BOB))
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CantVoteYours"

        clock.advance(WEEK + 1)

        response = await async_client.post(f"{API}/proposals/{pid}/end-vote", headers=as_(ALICE))
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "PermissionError"

        response = await async_client.post(f"{API}/proposals/{pid}/end-vote", headers=as_(BOB))
        assert response.status_code == 200
        assert response.json()["is_approved"] is False

    @pytest.mark.asyncio
    async def test_end_vote_before_deadline(self, async_client, org_with_member):
        proposal = await _create_proposal(async_client, org_with_member["id"])

        response = await async_client.post(f"{API}/proposals/{proposal['id']}/end-vote", headers=as_(BOB))
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DeadlineNotExceeded"


class TestErrorBodies:

    @pytest.mark.asyncio
    async def test_not_found_body(self, async_client):
        response = await async_client.get(f"{API}/organizations/12", headers=as_(ALICE))
        assert response.status_code == 404
        body = response.json()
        assert set(body) == {"error"}
        assert body["error"]["code"] == "NotFound"
        assert "12" in body["error"]["message"]

    @pytest.mark.asyncio
    async def test_not_a_member_is_forbidden(self, async_client, org_with_member):
        response = await async_client.get(f"{API}/organizations/{org_with_member['id']}", headers=as_(CAROL))
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "NotAMember"

    @pytest.mark.asyncio
    async def test_empty_registry_listing(self, async_client):
        response = await async_client.get(f"{API}/organizations", headers=as_(ALICE))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_negative_amount_is_rejected(self, async_client, org_with_member):
        response = await async_client.post(
            f"{API}/proposals",
            json={"title": "x", "amount_requested": -1, "organization_id": org_with_member["id"]},
            headers=as_(BOB),
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_amount_beyond_64_bit_column_is_rejected(self, async_client, org_with_member):
        response = await async_client.post(
            f"{API}/proposals",
            json={"title": "x", "amount_requested": MAX_AMOUNT + 1, "organization_id": org_with_member["id"]},
            headers=as_(BOB),
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_largest_amount_is_stored(self, async_client, org_with_member):
        proposal = await _create_proposal(async_client, org_with_member["id"], amount_requested=MAX_AMOUNT)
        assert proposal["amount_requested"] == 2 ** 63 - 1

        response = await async_client.get(f"{API}/proposals/{proposal['id']}", headers=as_(ALICE))
        assert response.json()["amount_requested"] == MAX_AMOUNT


class TestOpenApiSchema:

    def test_response_fields_are_required(self, test_app):
        schemas = test_app.openapi()["components"]["schemas"]
        assert {"title", "details", "amount_requested"} <= set(schemas["ProposalResponse"]["required"])
        assert {"name", "description", "avatar"} <= set(schemas["OrganizationResponse"]["required"])


class TestIdentity:

    @pytest.mark.asyncio
    async def test_missing_header_uses_anonymous_principal(self, async_client):
        response = await async_client.post(f"{API}/organizations", json={"name": "Anon"})
        assert response.status_code == 201
        assert response.json()["owner"] == settings.anonymous_principal

        response = await async_client.get(f"{API}/organizations")
        assert [o["name"] for o in response.json()] == ["Anon"]


class TestProposalRoutes:

    @pytest.mark.asyncio
    async def test_update_list_and_approved(self, async_client, clock, org_with_member):
        org_id = org_with_member["id"]
        proposal = await _create_proposal(async_client, org_id)
        pid = proposal["id"]

        response = await async_client.put(
            f"{API}/proposals/{pid}",
            json={"title": "Bigger servers", "details": "Four", "amount_requested": 400},
            headers=as_(BOB),
        )
        assert response.status_code == 200
        assert response.json()["amount_requested"] == 400

        response = await async_client.post(f"{API}/proposals/{pid}/downvote", headers=as_(ALICE))
        assert response.json()["downvotes"] == [ALICE]

        response = await async_client.get(f"{API}/proposals", params={"organization_id": org_id}, headers=as_(ALICE))
        assert [p["id"] for p in response.json()] == [pid]

        response = await async_client.get(
            f"{API}/proposals/approved", params={"organization_id": org_id}, headers=as_(ALICE)
        )
        assert response.status_code == 200
        assert response.json() == []

        clock.advance(WEEK + 1)
        response = await async_client.post(f"{API}/proposals/{pid}/end-vote", headers=as_(BOB))
        assert response.json()["is_approved"] is True

        response = await async_client.put(
            f"{API}/proposals/{pid}", json={"title": "late"}, headers=as_(BOB)
        )
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DeadlineExceeded"

    @pytest.mark.asyncio
    async def test_delete_gate_and_cascade(self, async_client, clock, org_with_member):
        org_id = org_with_member["id"]
        proposal = await _create_proposal(async_client, org_id)
        pid = proposal["id"]
        response = await async_client.post(
            f"{API}/comments", json={"content": "hmm", "proposal_id": pid}, headers=as_(ALICE)
        )
        assert response.status_code == 201
        comment_id = response.json()["id"]

        response = await async_client.delete(f"{API}/proposals/{pid}", headers=as_(BOB))
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DeadlineExceeded"

        clock.advance(WEEK + 1)
        response = await async_client.delete(f"{API}/proposals/{pid}", headers=as_(BOB))
        assert response.status_code == 200
        assert response.json()["id"] == pid

        response = await async_client.get(f"{API}/proposals/{pid}", headers=as_(BOB))
        assert response.status_code == 404
        response = await async_client.get(f"{API}/comments/{comment_id}", headers=as_(ALICE))
        assert response.status_code == 404
        response = await async_client.get(f"{API}/organizations/{org_id}", headers=as_(ALICE))
        assert response.json()["proposals"] == []


class TestCommentRoutes:

    @pytest.mark.asyncio
    async def test_comment_lifecycle(self, async_client, org_with_member):
        org_id = org_with_member["id"]
        proposal = await _create_proposal(async_client, org_id)

        response = await async_client.post(
            f"{API}/comments", json={"content": "Why two?", "proposal_id": proposal["id"]}, headers=as_(ALICE)
        )
        comment = response.json()
        assert comment["author"] == ALICE

        response = await async_client.get(
            f"{API}/comments",
            params={"proposal_id": proposal["id"], "organization_id": org_id},
            headers=as_(BOB),
        )
        assert [c["id"] for c in response.json()] == [comment["id"]]

        response = await async_client.put(
            f"{API}/comments/{comment['id']}", json={"content": "Why three?"}, headers=as_(ALICE)
        )
        assert response.json()["content"] == "Why three?"

        like_url = f"{API}/comments/{comment['id']}/like"
        response = await async_client.post(like_url, params={"organization_id": org_id}, headers=as_(ALICE))
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CantLikeYours"

        response = await async_client.post(like_url, params={"organization_id": org_id}, headers=as_(BOB))
        assert response.json()["likes"] == [BOB]

        response = await async_client.post(like_url, params={"organization_id": org_id}, headers=as_(BOB))
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "HasVoted"

        response = await async_client.delete(f"{API}/comments/{comment['id']}", headers=as_(BOB))
        assert response.status_code == 403

        response = await async_client.delete(f"{API}/comments/{comment['id']}", headers=as_(ALICE))
        assert response.status_code == 200

        response = await async_client.get(f"{API}/proposals/{proposal['id']}", headers=as_(ALICE))
        assert response.json()["comments"] == []


class TestOrganizationRoutes:

    @pytest.mark.asyncio
    async def test_update_members_and_delete(self, async_client, org_with_member):
        org_id = org_with_member["id"]

        response = await async_client.put(
            f"{API}/organizations/{org_id}", json={"name": "Renamed"}, headers=as_(BOB)
        )
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "PermissionError"

        response = await async_client.put(
            f"{API}/organizations/{org_id}", json={"name": "Renamed", "avatar": "a.png"}, headers=as_(ALICE)
        )
        assert response.json()["name"] == "Renamed"

        response = await async_client.delete(f"{API}/organizations/{org_id}/members/{BOB}", headers=as_(ALICE))
        assert response.json()["members"] == []

        response = await async_client.get(f"{API}/organizations/{org_id}", headers=as_(BOB))
        assert response.status_code == 403

        response = await async_client.delete(f"{API}/organizations/{org_id}", headers=as_(ALICE))
        assert response.status_code == 200

        response = await async_client.get(f"{API}/organizations/{org_id}", headers=as_(ALICE))
        assert response.status_code == 404
