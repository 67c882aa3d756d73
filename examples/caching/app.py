"""Template cache -- parse once, render many times.

Every parse goes through the environment's TemplateCache, keyed by source
text and delimiters. Section bodies that sit on whole lines are cached too,
so a section lambda or partial with the same text reuses them.

Run:
    python app.py
"""

from whisker import Environment, TemplateCache

cache = TemplateCache()
env = Environment(cache=cache)

SOURCE = """\
{{#items}}
- {{.}}
{{/items}}
"""

first = env.from_string(SOURCE)
second = env.from_string(SOURCE)

same_nodes = first.nodes is second.nodes
body_cached = "- {{.}}\n" in cache
stats = cache.stats

# A second environment sharing the cache skips parsing entirely
other = Environment(cache=cache)
output = other.render(SOURCE, {"items": ["a", "b"]})


def main() -> None:
    print(f"Shared nodes: {same_nodes}")
    print(f"Section body cached: {body_cached}")
    print(f"Entries: {len(cache)}, stats: {cache.stats}")
    print(output)


if __name__ == "__main__":
    main()
