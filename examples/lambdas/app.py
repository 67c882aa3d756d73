"""Lambdas -- callables in the context.

A callable that takes the section's raw text wraps it; a callable that
returns another callable produces template text that is rendered in place.
Plain zero-argument callables are just computed values.

Run:
    python app.py
"""

from whisker import Environment

env = Environment()

template = env.from_string("{{#bold}}Hi {{name}}.{{/bold}} {{greeting}} ({{count}} items)")

data = {
    "name": "Tater",
    "bold": lambda text: f"<b>{text}</b>",
    "greeting": lambda: lambda: "Welcome, {{name}}!",
    "count": lambda: len(["a", "b", "c"]),
}

output = template.render(data)


def main() -> None:
    print(output)
    # The interpolation lambda's text has been stored back into the data
    print(data["greeting"])


if __name__ == "__main__":
    main()
