"""End-to-end tests for the pin, pick, meet and review lifecycle."""

from pickme.config import AuthSettings
from pickme.util.jwt import create_token
from tests.factories import auth_cookie


def _pin(client, user, **overrides):
    body = {
        "activity_type": "coffee",
        "subject": "Flat white and a chat",
        "duration_minutes": 30,
        "latitude": 52.5200,
        "longitude": 13.4050,
    }
    body.update(overrides)
    return client.post("/pick-requests", json=body, cookies=auth_cookie(user))


class TestPickMeFlow:
    """Happy path through every stage over HTTP."""

    def test_full_lifecycle(self, client, users):
        requester, picker = users["requester"], users["picker"]

        # Requester pins a pick request
        response = _pin(client, requester)
        assert response.status_code == 201
        pick_request = response.json()["pick_request"]
        assert pick_request["status"] == "active"
        assert pick_request["activity_label"]

        # Picker finds it nearby
        response = client.get(
            "/pick-requests/nearby",
            params={"latitude": 52.5205, "longitude": 13.4055, "radius_meters": 1000},
            cookies=auth_cookie(picker),
        )
        assert response.status_code == 200
        items = response.json()["items"]
        assert [i["pick_request"]["pick_request_id"] for i in items] == [
            pick_request["pick_request_id"]
        ]
        assert items[0]["owner"]["name"] == "Rita"

        # Picker proposes, requester accepts
        response = client.post(
            "/matches",
            json={"pick_request_id": pick_request["pick_request_id"]},
            cookies=auth_cookie(picker),
        )
        assert response.status_code == 201
        match_id = response.json()["match"]["match_id"]

        response = client.put(
            f"/matches/{match_id}/respond",
            json={"approve": True},
            cookies=auth_cookie(requester),
        )
        assert response.status_code == 200
        assert response.json()["match"]["status"] == "accepted"
        meetup_id = response.json()["meetup_id"]
        assert meetup_id

        # The pick request is off the map
        response = client.get("/pick-requests/mine", cookies=auth_cookie(requester))
        assert response.json()["pick_requests"][0]["status"] == "matched"

        # Both confirm start, then both confirm end
        for action in ("start", "end"):
            for user in (picker, requester):
                response = client.post(
                    f"/meetups/{meetup_id}/{action}", cookies=auth_cookie(user)
                )
                assert response.status_code == 200
        meetup = response.json()["meetup"]
        assert meetup["status"] == "completed"
        assert meetup["duration_minutes"] is not None

        # Picker reviews the requester
        response = client.post(
            f"/meetups/{meetup_id}/reviews",
            json={
                "reviewed_user_id": str(requester.id),
                "rating": 5,
                "badges": ["Friendly"],
                "would_meet_again": True,
            },
            cookies=auth_cookie(picker),
        )
        assert response.status_code == 201
        assert response.json()["rating"] == 5

        # Rating is public
        response = client.get(f"/users/{requester.id}/rating")
        assert response.status_code == 200
        data = response.json()
        assert data["average_rating"] == 5.0
        assert data["completed_meetups"] == 1

        # The match list reflects completion
        response = client.get("/matches", cookies=auth_cookie(picker))
        assert response.json()["matches"][0]["status"] == "completed"


class TestErrorMapping:
    """Domain failures surface as the matching HTTP status."""

    def test_requires_cookie(self, client):
        response = client.get("/pick-requests/mine")

        assert response.status_code == 401

    def test_rejects_bad_cookie(self, client):
        response = client.get(
            "/pick-requests/mine", cookies={"auth_token": "not-a-jwt"}
        )

        assert response.status_code == 401

    def test_malformed_id_is_422(self, client, users):
        response = client.get(
            "/meetups/not-a-uuid", cookies=auth_cookie(users["picker"])
        )

        assert response.status_code == 422

    def test_out_of_range_duration_is_400(self, client, users):
        response = _pin(client, users["requester"], duration_minutes=0)

        assert response.status_code == 400

    def test_self_match_is_400(self, client, users):
        requester = users["requester"]
        pick_request_id = _pin(client, requester).json()["pick_request"][
            "pick_request_id"
        ]

        response = client.post(
            "/matches",
            json={"pick_request_id": pick_request_id},
            cookies=auth_cookie(requester),
        )

        assert response.status_code == 400

    def test_proposal_on_taken_request_is_409(self, client, users):
        pick_request_id = _pin(client, users["requester"]).json()["pick_request"][
            "pick_request_id"
        ]
        body = {"pick_request_id": pick_request_id}
        picker_cookie = auth_cookie(users["picker"])

        first = client.post("/matches", json=body, cookies=picker_cookie)
        second = client.post("/matches", json=body, cookies=picker_cookie)

        assert first.status_code == 201
        assert second.status_code == 409
        assert "in state matched" in second.json()["detail"]

    def test_reproposal_after_decline_is_409(self, client, users):
        pick_request_id = _pin(client, users["requester"]).json()["pick_request"][
            "pick_request_id"
        ]
        body = {"pick_request_id": pick_request_id}
        picker_cookie = auth_cookie(users["picker"])
        match_id = client.post("/matches", json=body, cookies=picker_cookie).json()[
            "match"
        ]["match_id"]
        declined = client.put(
            f"/matches/{match_id}/respond",
            json={"approve": False},
            cookies=auth_cookie(users["requester"]),
        )
        assert declined.status_code == 200

        response = client.post("/matches", json=body, cookies=picker_cookie)

        assert response.status_code == 409
        assert "already proposed" in response.json()["detail"]

    def test_only_requester_may_respond(self, client, users):
        pick_request_id = _pin(client, users["requester"]).json()["pick_request"][
            "pick_request_id"
        ]
        match_id = client.post(
            "/matches",
            json={"pick_request_id": pick_request_id},
            cookies=auth_cookie(users["picker"]),
        ).json()["match"]["match_id"]

        response = client.put(
            f"/matches/{match_id}/respond",
            json={"approve": True},
            cookies=auth_cookie(users["stranger"]),
        )

        assert response.status_code == 403

    def test_cancel_unknown_pick_request_is_404(self, client, users):
        response = client.delete(
            "/pick-requests/00000000-0000-0000-0000-000000000000",
            cookies=auth_cookie(users["requester"]),
        )

        assert response.status_code == 404

    def test_cancelled_pick_request_cannot_be_picked(self, client, users):
        pick_request_id = _pin(client, users["requester"]).json()["pick_request"][
            "pick_request_id"
        ]
        response = client.delete(
            f"/pick-requests/{pick_request_id}",
            cookies=auth_cookie(users["requester"]),
        )
        assert response.status_code == 200

        response = client.post(
            "/matches",
            json={"pick_request_id": pick_request_id},
            cookies=auth_cookie(users["picker"]),
        )

        assert response.status_code == 409

    def test_rating_for_unknown_user_is_404(self, client):
        response = client.get("/users/00000000-0000-0000-0000-000000000000/rating")

        assert response.status_code == 404

    def test_signed_cookie_with_non_uuid_subject_is_401(self, client):
        cookie = {"auth_token": create_token("not-a-uuid", AuthSettings())}

        response = client.get("/pick-requests/mine", cookies=cookie)

        assert response.status_code == 401
