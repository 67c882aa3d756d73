"""Error messages -- codes, locations and source snippets.

Malformed templates fail at parse time with a TemplateSyntaxError that
points at the offending tag. Colors follow NO_COLOR / FORCE_COLOR and TTY
detection.

Run:
    python app.py
"""

from whisker import Environment, TemplateSyntaxError
from whisker.environment.terminal import strip_colors

env = Environment()

SOURCE = """\
<ul>
{{#items}}
  <li>{{name}}</li>
{{/item}}
</ul>
"""

try:
    env.from_string(SOURCE, name="list.mustache")
except TemplateSyntaxError as e:
    error = e

message = strip_colors(str(error))
compact = strip_colors(error.format_compact())


def main() -> None:
    print(error)
    print()
    print(error.format_compact())


if __name__ == "__main__":
    main()
