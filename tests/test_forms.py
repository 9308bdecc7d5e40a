"""API tests for form creation, listing, public/owner fetch and deletion."""

from conftest import SAMPLE_QUESTIONS, auth_headers, create_form, register


class TestCreateForm:

    def test_create_form(self, client, admin):
        form = create_form(
            client,
            admin["token"],
            title="  Team Feedback  ",
            description="Quarterly pulse",
        )

        assert form["id"]
        assert form["title"] == "Team Feedback"
        assert form["description"] == "Quarterly pulse"
        assert form["admin"] == admin["id"]
        assert form["isExpired"] is False
        assert form["expiresAt"] is None
        assert [q["id"] for q in form["questions"]] == ["q1", "q2"]
        assert form["questions"][0]["options"] == []
        assert form["questions"][1]["options"] == ["A", "B", "C"]

    def test_empty_title_is_rejected(self, client, admin):
        response = client.post(
            "/api/forms",
            json={"title": "   ", "questions": SAMPLE_QUESTIONS},
            headers=auth_headers(admin["token"]),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Title is required."

    def test_missing_title_is_rejected(self, client, admin):
        response = client.post(
            "/api/forms",
            json={"questions": SAMPLE_QUESTIONS},
            headers=auth_headers(admin["token"]),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Title is required."

    def test_multiple_choice_needs_options(self, client, admin):
        questions = [{"id": "q1", "type": "multiple-choice", "questionText": "Pick", "options": []}]

        response = client.post(
            "/api/forms",
            json={"title": "Poll", "questions": questions},
            headers=auth_headers(admin["token"]),
        )

        assert response.status_code == 400
        assert "needs at least one option" in response.json()["message"]

    def test_blank_option_is_rejected(self, client, admin):
        questions = [{"id": "q1", "type": "multiple-choice", "questionText": "Pick", "options": ["A", " "]}]

        response = client.post(
            "/api/forms",
            json={"title": "Poll", "questions": questions},
            headers=auth_headers(admin["token"]),
        )

        assert response.status_code == 400

    def test_repeated_option_is_rejected(self, client, admin):
        questions = [{"id": "q1", "type": "multiple-choice", "questionText": "Pick", "options": ["A", "B", " A"]}]

        response = client.post(
            "/api/forms",
            json={"title": "Poll", "questions": questions},
            headers=auth_headers(admin["token"]),
        )

        assert response.status_code == 400
        assert 'Options of "Pick" must be unique' in response.json()["message"]

    def test_unknown_question_type_is_rejected(self, client, admin):
        questions = [{"id": "q1", "type": "rating", "questionText": "Stars?"}]

        response = client.post(
            "/api/forms",
            json={"title": "Poll", "questions": questions},
            headers=auth_headers(admin["token"]),
        )

        assert response.status_code == 400

    def test_duplicate_question_ids_are_rejected(self, client, admin):
        questions = [
            {"id": "q1", "type": "text", "questionText": "First"},
            {"id": "q1", "type": "text", "questionText": "Second"},
        ]

        response = client.post(
            "/api/forms",
            json={"title": "Poll", "questions": questions},
            headers=auth_headers(admin["token"]),
        )

        assert response.status_code == 400
        assert response.json()["message"] == 'Question id "q1" is used more than once'

    def test_create_requires_auth(self, client):
        response = client.post("/api/forms", json={"title": "Poll", "questions": SAMPLE_QUESTIONS})
        assert response.status_code == 401

    def test_expiry_is_reported(self, client, admin):
        past = create_form(client, admin["token"], title="Old", expiresAt="2000-01-01T00:00:00Z")
        future = create_form(client, admin["token"], title="New", expiresAt="2999-01-01T00:00:00Z")

        assert past["isExpired"] is True
        assert past["expiresAt"].startswith("2000-01-01T00:00:00")
        assert future["isExpired"] is False


class TestListForms:

    def test_lists_own_forms_newest_first(self, client, admin):
        first = create_form(client, admin["token"], title="First")
        second = create_form(client, admin["token"], title="Second")

        response = client.get("/api/forms", headers=auth_headers(admin["token"]))

        assert response.status_code == 200
        assert [f["id"] for f in response.json()["data"]] == [second["id"], first["id"]]

    def test_other_users_forms_are_not_listed(self, client, admin):
        create_form(client, admin["token"], title="Mine")
        other = register(client, email="other@example.com")

        response = client.get("/api/forms", headers=auth_headers(other["token"]))

        assert response.status_code == 200
        assert response.json()["data"] == []


class TestGetForm:

    def test_public_fetch_hides_owner(self, client, form):
        response = client.get(f"/api/forms/{form['id']}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == form["id"]
        assert data["title"] == form["title"]
        assert "admin" not in data

    def test_public_fetch_of_missing_form(self, client):
        response = client.get("/api/forms/does-not-exist")

        assert response.status_code == 404
        assert response.json()["message"] == "Form not found"

    def test_owner_details(self, client, admin, form):
        response = client.get(
            f"/api/forms/{form['id']}/admin-details",
            headers=auth_headers(admin["token"]),
        )

        assert response.status_code == 200
        assert response.json()["data"]["admin"] == admin["id"]

    def test_details_of_someone_elses_form_look_missing(self, client, form):
        other = register(client, email="other@example.com")

        response = client.get(
            f"/api/forms/{form['id']}/admin-details",
            headers=auth_headers(other["token"]),
        )

        assert response.status_code == 404


class TestDeleteForm:

    def test_delete_removes_form_from_list(self, client, admin, form):
        response = client.delete(f"/api/forms/{form['id']}", headers=auth_headers(admin["token"]))

        assert response.status_code == 200
        assert response.json()["data"]["id"] == form["id"]

        listed = client.get("/api/forms", headers=auth_headers(admin["token"]))
        assert listed.json()["data"] == []
        assert client.get(f"/api/forms/{form['id']}").status_code == 404

    def test_non_owner_cannot_delete(self, client, admin, form):
        other = register(client, email="other@example.com")

        response = client.delete(f"/api/forms/{form['id']}", headers=auth_headers(other["token"]))

        assert response.status_code == 404
        still_there = client.get("/api/forms", headers=auth_headers(admin["token"]))
        assert [f["id"] for f in still_there.json()["data"]] == [form["id"]]
