"""Server-rendered HTML pages."""

from html import escape

from media_dashboard.domain.models import StoredImage, UserProfile

_PAGE = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{title} - Media Dashboard</title>
    <style>
      body {{ font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }}
      nav a {{ margin-right: 1rem; }}
      .row {{ margin-bottom: 1rem; }}
      input, select {{ padding: 0.4rem 0.6rem; }}
      button {{ padding: 0.4rem 0.8rem; margin-right: 0.5rem; }}
      .grid {{ display: flex; flex-wrap: wrap; gap: 1rem; }}
      .grid img {{ width: 200px; height: 200px; object-fit: cover; }}
      pre {{ background: #f6f6f6; padding: 1rem; overflow: auto; }}
    </style>
  </head>
  <body>
    {nav}
    <h1>{title}</h1>
    {body}
  </body>
</html>
"""

_NAV = """<nav>
      <a href="/dashboard">Dashboard</a>
      <a href="/images">Upload</a>
      <a href="/gallery">Gallery</a>
      <a href="/list-images">Image list</a>
      <a href="/translation">Translations</a>
      <a href="/logout">Log out</a>
    </nav>"""


def _render(title: str, body: str, *, with_nav: bool = True) -> str:
    return _PAGE.format(
        title=escape(title), body=body, nav=_NAV if with_nav else ""
    )


def login_page() -> str:
    return _render(
        "Sign in",
        '<a href="/auth/google"><button>Sign in with Google</button></a>',
        with_nav=False,
    )


def dashboard_page(user: UserProfile) -> str:
    photo = (
        f'<img src="{escape(user.photo_url)}" alt="" width="64" height="64" />'
        if user.photo_url
        else ""
    )
    return _render(
        "Dashboard",
        f"""<div class="row">{photo}</div>
    <p>Welcome, <strong>{escape(user.display_name)}</strong></p>
    <p>User id: <code>{escape(user.id)}</code></p>""",
    )


def upload_page() -> str:
    return _render(
        "Upload an image",
        """<form action="/upload" method="post" enctype="multipart/form-data">
      <div class="row"><input type="file" name="image" accept="image/*" /></div>
      <button type="submit">Upload</button>
    </form>""",
    )


def upload_result_page(image: StoredImage) -> str:
    url = escape(image.url)
    return _render(
        "Upload complete",
        f"""<p><a href="{url}">{url}</a></p>
    <img src="{url}" alt="Uploaded image" style="max-width: 480px" />""",
    )


def image_list_page(images: list[StoredImage]) -> str:
    if not images:
        return _render("Images", "<p>No images uploaded yet.</p>")
    items = "\n".join(
        f'      <li><a href="{escape(image.url)}">{escape(image.url)}</a></li>'
        for image in images
    )
    return _render("Images", f"<ul>\n{items}\n    </ul>")


def gallery_page(images: list[StoredImage]) -> str:
    if not images:
        return _render("Gallery", "<p>No images uploaded yet.</p>")
    tiles = "\n".join(
        f'      <a href="{escape(image.url)}"><img src="{escape(image.url)}" alt="" /></a>'
        for image in images
    )
    return _render("Gallery", f'<div class="grid">\n{tiles}\n    </div>')


def translation_page(languages: list[str]) -> str:
    options = "".join(
        f'<option value="{escape(language)}">{escape(language)}</option>'
        for language in languages
    )
    return _render(
        "Translations",
        f"""<div class="row">
      <label>Language</label>
      <select id="language" onchange="loadLanguage()">{options}</select>
    </div>
    <div class="row">
      <input id="key" placeholder="Key" />
      <input id="value" placeholder="Value" />
      <button onclick="saveTranslation()">Save</button>
    </div>
    <pre id="output">Ready.</pre>
    <script>
      async function loadLanguage() {{
        const language = document.getElementById('language').value;
        const output = document.getElementById('output');
        output.textContent = 'Loading...';
        const res = await fetch('/api/translation/' + encodeURIComponent(language));
        if (!res.ok) {{
          output.textContent = 'Error: ' + res.status;
          return;
        }}
        const data = await res.json();
        output.textContent = JSON.stringify(data, null, 2);
      }}
      async function saveTranslation() {{
        const payload = {{
          language: document.getElementById('language').value,
          key: document.getElementById('key').value,
          value: document.getElementById('value').value
        }};
        const res = await fetch('/api/translation/update', {{
          method: 'POST',
          headers: {{ 'Content-Type': 'application/json' }},
          body: JSON.stringify(payload)
        }});
        if (!res.ok) {{
          document.getElementById('output').textContent = 'Error: ' + res.status;
          return;
        }}
        await loadLanguage();
      }}
      loadLanguage();
    </script>""",
    )
