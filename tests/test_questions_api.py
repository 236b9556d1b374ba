import pytest


QUESTION = {
    "text": "2+2?", "option_a": "3", "option_b": "4", "option_c": "5", "option_d": "6",
    "correct_answer": "B",
}


def test_create_and_list_questions(client, owner_headers, make_user):
    r = client.post("/questions", headers=owner_headers, json=QUESTION)
    assert r.status_code == 201
    created = r.json()
    assert created["correct_answer"] == "B"

    teacher = make_user("teacher", role="admin")
    assert client.get("/questions", headers=teacher).json() == [created]


def test_pupils_do_not_see_correct_answer(client, owner_headers, make_user):
    client.post("/questions", headers=owner_headers, json=QUESTION)
    pupil = make_user("ann")
    [question] = client.get("/questions", headers=pupil).json()
    assert "correct_answer" not in question
    assert question["option_b"] == "4"


def test_questions_require_token(client):
    assert client.get("/questions").status_code == 401


def test_pupil_cannot_manage_questions(client, owner_headers, make_user, make_question):
    pupil = make_user("ann")
    qid = make_question()
    assert client.post("/questions", headers=pupil, json=QUESTION).status_code == 403
    assert client.put(f"/questions/{qid}", headers=pupil, json=QUESTION).status_code == 403
    assert client.delete(f"/questions/{qid}", headers=pupil).status_code == 403


@pytest.mark.parametrize("letter,expected", [("b", "B"), (" C ", "C"), ("D", "D")])
def test_correct_answer_is_normalized(client, owner_headers, letter, expected):
    r = client.post("/questions", headers=owner_headers, json={**QUESTION, "correct_answer": letter})
    assert r.status_code == 201
    assert r.json()["correct_answer"] == expected


@pytest.mark.parametrize("letter", ["E", "AB", "", "option_a"])
def test_correct_answer_must_be_an_option_letter(client, owner_headers, letter):
    r = client.post("/questions", headers=owner_headers, json={**QUESTION, "correct_answer": letter})
    assert r.status_code == 422
    assert r.json()["error"]["type"] == "validation_error"


def test_missing_question_fields(client, owner_headers):
    body = dict(QUESTION)
    del body["option_d"]
    assert client.post("/questions", headers=owner_headers, json=body).status_code == 422


def test_update_question(client, owner_headers, make_user, make_question):
    teacher = make_user("teacher", role="admin")
    qid = make_question(correct="A")
    r = client.put(f"/questions/{qid}", headers=teacher, json={**QUESTION, "correct_answer": "d"})
    assert r.status_code == 200
    assert r.json() == {**QUESTION, "correct_answer": "D", "id": qid}


def test_update_and_delete_missing_question(client, owner_headers):
    assert client.put("/questions/404", headers=owner_headers, json=QUESTION).status_code == 404
    assert client.delete("/questions/404", headers=owner_headers).status_code == 404


def test_delete_question_cascades_answers(client, owner_headers, make_user, make_question):
    pupil = make_user("ann")
    qid = make_question(correct="A")
    client.post("/answers", headers=pupil, json={"question_id": qid, "selected_option": "B"})
    assert client.get("/statistics", headers=pupil).json()["pupilStatistics"][0]["incorrectAnswers"] == 1

    assert client.delete(f"/questions/{qid}", headers=owner_headers).status_code == 200
    assert client.get("/questions", headers=owner_headers).json() == []
    own = client.get("/statistics", headers=pupil).json()["pupilStatistics"][0]
    assert (own["correctAnswers"], own["incorrectAnswers"]) == (0, 0)


def test_submit_answer(client, make_user, make_question):
    pupil = make_user("ann")
    qid = make_question(correct="A")
    r = client.post("/answers", headers=pupil, json={"question_id": qid, "selected_option": "a"})
    assert r.status_code == 201
    assert r.json()["message"] == "Answer submitted"


def test_repeated_answers_are_all_counted(client, make_user, make_question):
    pupil = make_user("ann")
    qid = make_question(correct="A")
    for option in ("A", "A", "B"):
        client.post("/answers", headers=pupil, json={"question_id": qid, "selected_option": option})
    own = client.get("/statistics", headers=pupil).json()["pupilStatistics"][0]
    assert (own["correctAnswers"], own["incorrectAnswers"]) == (2, 1)


def test_submit_answer_validation(client, make_user, make_question):
    pupil = make_user("ann")
    qid = make_question()
    assert client.post("/answers", headers=pupil, json={"question_id": qid, "selected_option": "Z"}).status_code == 422
    assert client.post("/answers", headers=pupil, json={"question_id": 777, "selected_option": "A"}).status_code == 404
    assert client.post("/answers", json={"question_id": qid, "selected_option": "A"}).status_code == 401
