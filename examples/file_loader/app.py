"""File-based partials -- the most common real-world pattern.

Loads ``.mustache`` files from disk with FileSystemLoader. Partials include
other partials, and standalone partial tags indent everything they render.

Run:
    python app.py
"""

from pathlib import Path

from whisker import Environment, FileSystemLoader

templates_dir = Path(__file__).parent / "templates"
env = Environment(loader=FileSystemLoader(str(templates_dir)))

nav_items = [
    {"url": "/", "label": "Home"},
    {"url": "/about", "label": "About"},
]

page_template = env.get_template("page")

home_output = page_template.render(
    site_name="My Site",
    nav_items=nav_items,
    title="Welcome",
    body="<p>This is a <em>whisker</em>-powered site.</p>",
)

about_output = page_template.render(
    site_name="My Site",
    nav_items=nav_items,
    title="About Us & Friends",
    body="<p>Logic-less templates.</p>",
)


def main() -> None:
    print("=== Home Page ===")
    print(home_output)
    print()
    print("=== About Page ===")
    print(about_output)


if __name__ == "__main__":
    main()
