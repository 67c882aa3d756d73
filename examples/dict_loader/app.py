"""DictLoader -- partials from an in-memory mapping.

Partials come from a dictionary. No templates directory needed.
Use case: tests, generated templates, single-file apps.

Run:
    python app.py
"""

from whisker import DictLoader, Environment

templates = {
    "page": """\
<h1>{{heading}}</h1>
<ul>
{{#people}}
  {{>person}}
{{/people}}
{{^people}}
  <li>Nobody yet</li>
{{/people}}
</ul>
""",
    "person": "<li>{{name}}{{#admin}} (admin){{/admin}}</li>\n",
}

env = Environment(loader=DictLoader(templates))
template = env.get_template("page")

output = template.render(
    heading="Team",
    people=[
        {"name": "Ann", "admin": True},
        {"name": "Bob & Co"},
    ],
)

empty_output = template.render(heading="Team", people=[])


def main() -> None:
    print(output)
    print(empty_output)


if __name__ == "__main__":
    main()
