"""
Tabular, summary and CSV projections of a form's responses.

All functions work on the JSON shapes the API returns (a serialized form with
its ``questions`` and serialized responses with ``answers`` and
``submittedAt``), so the API client can build the same views from what it
fetched without another round trip.
"""
import csv
import io
import re
from typing import Dict, Iterator, List, Optional

from feedback_app.schema.form_schema import QuestionType
from feedback_app.utils.date_utils import format_submission_time

SUBMISSION_TIME_HEADER = "Submission Time"
CSV_OPTION_SEPARATOR = "; "
TABLE_OPTION_SEPARATOR = ", "


def _find_answer(response: dict, question_id: str) -> Optional[dict]:
    for answer in response.get("answers") or []:
        if answer.get("questionId") == question_id:
            return answer
    return None


def answer_value(question: dict, response: dict, separator: str) -> str:
    """Cell text for one question of one response; empty when unanswered."""
    answer = _find_answer(response, question["id"])
    if answer is None:
        return ""
    if question["type"] == QuestionType.MULTIPLE_CHOICE.value:
        return separator.join(answer.get("selectedOptions") or [])
    return answer.get("answerText") or ""


def build_tabular_view(form: dict, responses: List[dict]) -> dict:
    questions = form.get("questions") or []
    headers = [SUBMISSION_TIME_HEADER] + [q["questionText"] for q in questions]
    rows = []
    for response in responses:
        row = [format_submission_time(response["submittedAt"])]
        row.extend(answer_value(q, response, TABLE_OPTION_SEPARATOR) for q in questions)
        rows.append(row)
    return {"headers": headers, "rows": rows}


def build_summary(form: dict, responses: List[dict]) -> List[dict]:
    """
    Per-question digest in form order.

    Text questions list every non-empty answer. Multiple-choice questions
    count selections per declared option; values that are not (or are no
    longer) options of the question are ignored.
    """
    summary = []
    for question in form.get("questions") or []:
        if question["type"] == QuestionType.MULTIPLE_CHOICE.value:
            counts: Dict[str, int] = {option: 0 for option in question.get("options") or []}
            for response in responses:
                answer = _find_answer(response, question["id"])
                if answer is None:
                    continue
                # a response counts at most once per option
                for selected in dict.fromkeys(answer.get("selectedOptions") or []):
                    if selected in counts:
                        counts[selected] += 1
            data = counts
        else:
            data = [
                text for text in (answer_value(question, response, "") for response in responses)
                if text != ""
            ]

        summary.append({
            "questionId": question["id"],
            "question": question["questionText"],
            "type": question["type"],
            "data": data,
        })
    return summary


def csv_cell(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def iter_csv_lines(form: dict, responses: List[dict]) -> Iterator[str]:
    """Header line then one line per response, in the order given."""
    questions = form.get("questions") or []
    header = [SUBMISSION_TIME_HEADER] + [csv_cell(q["questionText"]) for q in questions]
    yield ",".join(header) + "\n"

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for response in responses:
        cells = [format_submission_time(response["submittedAt"])]
        cells.extend(answer_value(q, response, CSV_OPTION_SEPARATOR) for q in questions)
        writer.writerow(cells)
        yield buffer.getvalue()
        buffer.seek(0)
        buffer.truncate(0)


def export_filename(title: str) -> str:
    return f"{re.sub(r'[^A-Za-z0-9]', '_', title)}_responses.csv"
