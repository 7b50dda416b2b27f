from __future__ import annotations

import os

from flask import Flask, Response, flash, redirect, render_template_string, request

from math_bingo.config import DEFAULT_CONFIG, BingoConfig, default_font_path
from math_bingo.core.pdf import render_bingo_pdf


HTML = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>Math Bingo</title>
    <style>
      body { font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; margin: 24px; max-width: 920px; }
      h1 { margin: 0 0 8px; }
      .hint { color: #333; margin: 0 0 16px; }
      label { display: block; font-weight: 600; margin: 12px 0 6px; }
      input[type="text"], input[type="number"], textarea { width: 100%; padding: 10px; border: 1px solid #111; border-radius: 6px; }
      textarea { min-height: 260px; font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, monospace; }
      .row { display: grid; grid-template-columns: 1fr 1fr; gap: 12px; }
      .btn { margin-top: 14px; padding: 10px 14px; border: 2px solid #111; border-radius: 10px; background: #fff; font-weight: 700; cursor: pointer; }
      .box { border: 2px solid #111; border-radius: 12px; padding: 14px; }
      .flash { margin: 10px 0; padding: 10px 12px; border: 1px solid #111; border-radius: 8px; }
      .small { font-size: 12px; color: #333; }
      .mono { font-family: ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, monospace; }
    </style>
  </head>
  <body>
    <h1>Math Bingo</h1>
    <p class="hint">Paste/upload your answers, pick a grid size and generate a printable PDF.</p>

    {% with messages = get_flashed_messages() %}
      {% if messages %}
        {% for msg in messages %}
          <div class="flash">{{ msg }}</div>
        {% endfor %}
      {% endif %}
    {% endwith %}

    <form class="box" method="post" action="/generate" enctype="multipart/form-data">
      <div class="row">
        <div>
          <label>Rows</label>
          <input type="number" name="rows" value="{{ config.rows }}" min="1" step="1" required>
        </div>
        <div>
          <label>Columns</label>
          <input type="number" name="cols" value="{{ config.cols }}" min="1" step="1" required>
        </div>
      </div>

      <div class="row">
        <div>
          <label>Number of cards</label>
          <input type="number" name="count" value="{{ config.num_cards }}" min="1" max="1000" step="1" required>
        </div>
        <div>
          <label>Cards per page</label>
          <input type="number" name="per_page" value="{{ config.cards_per_page }}" min="1" max="12" step="1" required>
        </div>
      </div>

      <div class="row">
        <div>
          <label>Header (optional, printed on the last row)</label>
          <input type="text" name="header" value="{{ config.header }}">
        </div>
        <div>
          <label>Seed (optional, for reproducible PDFs)</label>
          <input type="number" name="seed" placeholder="e.g. 12345">
        </div>
      </div>

      <label>Answers file (optional)</label>
      <input type="file" name="file" accept=".txt,text/plain">
      <div class="small">If provided, this overrides the pasted text.</div>

      <label>Answers (plain text)</label>
      <textarea name="answers" placeholder="1/2&#10;! from:1 to:10 step:1&#10;---&#10;PI"></textarea>
      <p class="small">
        One answer per line. Lines after <span class="mono">---</span> are only used once the others run out.
        <span class="mono">! from:1 to:10 step:1</span> expands to a range of numbers.
      </p>

      <button class="btn" type="submit">Generate PDF</button>
    </form>

  </body>
</html>
"""


app = Flask(__name__)
app.secret_key = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")


def _form_number(name: str, default: str) -> float:
    raw = (request.form.get(name) or default).strip()
    return float(raw)


@app.get("/")
def index() -> str:
    return render_template_string(HTML, config=DEFAULT_CONFIG)


@app.post("/generate")
def generate() -> Response:
    try:
        rows = _form_number("rows", str(DEFAULT_CONFIG.rows))
        cols = _form_number("cols", str(DEFAULT_CONFIG.cols))
        count = _form_number("count", str(DEFAULT_CONFIG.num_cards))
        per_page = _form_number("per_page", str(DEFAULT_CONFIG.cards_per_page))
    except ValueError:
        flash("Rows, columns, number of cards and cards per page must be numbers.")
        return redirect("/")

    seed_raw = (request.form.get("seed") or "").strip()
    seed = None
    if seed_raw:
        try:
            seed = int(seed_raw)
        except ValueError:
            flash("Seed must be a whole number.")
            return redirect("/")

    try:
        config = BingoConfig.from_values(
            rows=rows,
            cols=cols,
            num_cards=count,
            cards_per_page=per_page,
            header=request.form.get("header"),
            seed=seed,
        )
    except (ValueError, OverflowError) as e:
        flash(str(e))
        return redirect("/")

    text = request.form.get("answers") or ""
    uploaded = request.files.get("file")
    if uploaded and uploaded.filename:
        try:
            text = uploaded.read().decode("utf-8-sig")
        except UnicodeDecodeError:
            flash("Unable to read uploaded file as UTF-8 text.")
            return redirect("/")

    if not text.strip():
        flash("Provide a list of answers (paste text or upload a .txt file).")
        return redirect("/")

    try:
        pdf_bytes = render_bingo_pdf(text, config, font_path=default_font_path())
    except ValueError as e:
        flash(str(e))
        return redirect("/")

    filename = f"math-bingo-{config.rows}x{config.cols}.pdf"
    return Response(
        pdf_bytes,
        mimetype="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=5000, debug=True)
