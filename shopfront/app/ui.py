"""Server-rendered pages composed of HTML client output.

The clients only produce fragments; the page layout wraps their header and
body parts.
"""

from flask import render_template

from shopfront.app.client import HtmlClient


def render_page(*clients: HtmlClient, title: str = "", status: int = 200):
    header = "".join(client.header() for client in clients)
    body = "".join(client.body() for client in clients)
    return render_template("page.html", title=title, header=header, body=body), status
