from io import BytesIO

import pytest

from math_bingo.web.app import app


@pytest.fixture()
def client():
    app.config.update(TESTING=True)
    with app.test_client() as client:
        yield client


def _form(**overrides):
    form = {"rows": "5", "cols": "5", "count": "2", "per_page": "2", "header": "Math Bingo", "seed": "3"}
    form.update(overrides)
    return form


def test_index_renders_form(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Math Bingo" in resp.data


def test_generate_from_pasted_answers(client):
    resp = client.post("/generate", data=_form(answers="1/2\n! from:1 to:30 step:1\n"))
    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.data.startswith(b"%PDF-")
    assert 'filename="math-bingo-5x5.pdf"' in resp.headers["Content-Disposition"]


def test_generate_from_uploaded_file(client):
    data = _form(answers="")
    data["file"] = (BytesIO("\ufeff3/7\n---\nPI\n".encode("utf-8")), "answers.txt")
    resp = client.post("/generate", data=data, content_type="multipart/form-data")
    assert resp.status_code == 200
    assert resp.data.startswith(b"%PDF-")


@pytest.mark.parametrize(
    "overrides",
    [
        {"answers": ""},
        {"answers": "1", "count": "zero"},
        {"answers": "1", "count": "0"},
        {"answers": "1", "seed": "abc"},
        {"answers": "! from:1 to:4\n"},
    ],
)
def test_generate_rejects_bad_input(client, overrides):
    resp = client.post("/generate", data=_form(**overrides))
    assert resp.status_code == 302
