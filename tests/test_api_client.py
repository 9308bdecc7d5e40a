"""Tests for the API client and its cache invalidation, run against the real app."""

from datetime import datetime, timedelta, timezone

import pytest

from conftest import SAMPLE_QUESTIONS
from feedback_app.client.api_client import ApiError, AuthRequiredError, FeedbackApiClient
from feedback_app.schema.form_schema import Question, QuestionType
from feedback_app.schema.response_schema import AnswerIn


@pytest.fixture
def api(client):
    api_client = FeedbackApiClient(http=client)
    api_client.register("Admin", "admin@example.com", "secret1")
    return api_client


def test_admin_calls_require_sign_in(client):
    anonymous = FeedbackApiClient(http=client)

    with pytest.raises(AuthRequiredError):
        anonymous.get_admin_forms()
    with pytest.raises(AuthRequiredError):
        anonymous.create_form("Poll", SAMPLE_QUESTIONS)


def test_login_with_wrong_password_raises_api_error(client, api):
    other = FeedbackApiClient(http=client)

    with pytest.raises(ApiError) as excinfo:
        other.login("admin@example.com", "wrong-password")

    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "Invalid credentials"
    assert not other.is_authenticated


def test_create_form_invalidates_form_list(api):
    assert api.get_admin_forms() == []

    questions = [
        Question(id="q1", type=QuestionType.TEXT, questionText="Q1", required=True),
        Question(id="q2", type=QuestionType.MULTIPLE_CHOICE, questionText="Q2", options=["A", "B"]),
    ]
    form = api.create_form(
        "Team Feedback",
        questions,
        expires_at=datetime.now(timezone.utc) + timedelta(days=1),
    )

    forms = api.get_admin_forms()
    assert [f["id"] for f in forms] == [form["id"]]
    assert forms[0]["isExpired"] is False


def test_reads_are_cached_until_invalidated(api):
    form = api.create_form("Team Feedback", SAMPLE_QUESTIONS)

    first = api.get_form_responses(form["id"])
    assert first == []
    assert api.get_form_responses(form["id"]) is first

    api.submit_response(form["id"], [AnswerIn(questionId="q1", answerText="Nice")])

    refreshed = api.get_form_responses(form["id"])
    assert refreshed is not first
    assert len(refreshed) == 1


def test_delete_form_invalidates_everything_about_it(api):
    form = api.create_form("Team Feedback", SAMPLE_QUESTIONS)
    api.get_admin_forms()
    api.get_form(form["id"])
    api.get_admin_form_details(form["id"])
    api.get_form_responses(form["id"])

    api.delete_form(form["id"])

    assert len(api.cache) == 0
    assert api.get_admin_forms() == []
    with pytest.raises(ApiError) as excinfo:
        api.get_form_responses(form["id"])
    assert excinfo.value.status_code == 404


def test_public_form_fetch_needs_no_token(client, api):
    form = api.create_form("Team Feedback", SAMPLE_QUESTIONS)
    respondent = FeedbackApiClient(http=client)

    public = respondent.get_form(form["id"])

    assert public["title"] == "Team Feedback"
    assert "admin" not in public


def test_submit_missing_required_answer(api):
    form = api.create_form("Team Feedback", SAMPLE_QUESTIONS)

    with pytest.raises(ApiError) as excinfo:
        api.submit_response(form["id"], [{"questionId": "q2", "selectedOptions": ["A"]}])

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == 'Required question "Q1" is missing an answer.'


def test_export_csv_and_local_views(api):
    form = api.create_form("Team Feedback", SAMPLE_QUESTIONS)
    api.submit_response(form["id"], [
        {"questionId": "q1", "answerText": "First"},
        {"questionId": "q2", "selectedOptions": ["B"]},
    ])
    api.submit_response(form["id"], [{"questionId": "q1", "answerText": "Second"}])

    filename, content = api.export_csv(form["id"])
    assert filename == "Team_Feedback_responses.csv"
    lines = content.decode("utf-8").rstrip("\n").split("\n")
    assert lines[0] == 'Submission Time,"Q1","Q2"'
    assert lines[1].endswith(',"First","B"')
    assert lines[2].endswith(',"Second",""')

    views = api.get_response_views(form["id"])
    assert views["tabular"]["headers"] == ["Submission Time", "Q1", "Q2"]
    assert [row[1] for row in views["tabular"]["rows"]] == ["Second", "First"]
    assert views["summary"][1]["data"] == {"A": 0, "B": 1, "C": 0}


def test_logout_clears_token_and_cache(api):
    api.get_admin_forms()

    api.logout()

    assert not api.is_authenticated
    assert len(api.cache) == 0
    with pytest.raises(AuthRequiredError):
        api.get_admin_forms()
