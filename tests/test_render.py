"""Rendering tests: interpolation, sections, lambdas, partials and delimiters."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from whisker import Environment, TemplateRuntimeError
from whisker.environment.terminal import strip_colors

from .conftest import assert_renders


class TestInterpolation:
    def test_literal_only(self, env: Environment) -> None:
        assert_renders(env, "plain text\nwith lines", {"a": 1}, "plain text\nwith lines")

    def test_escaped(self, env: Environment) -> None:
        assert_renders(env, "{{x}}", {"x": '<b>&"'}, "&lt;b&gt;&amp;&quot;")

    def test_triple_is_raw(self, env: Environment) -> None:
        assert_renders(env, "{{{x}}}", {"x": '<b>&"'}, '<b>&"')

    def test_ampersand_is_raw(self, env: Environment) -> None:
        assert_renders(env, "{{&x}}", {"x": "<i>"}, "<i>")

    def test_apostrophe_passes_through(self, env: Environment) -> None:
        assert_renders(env, "{{x}}", {"x": "it's"}, "it's")

    def test_missing_name_is_empty(self, env: Environment) -> None:
        assert_renders(env, "[{{nope}}]", {}, "[]")

    def test_none_is_empty(self, env: Environment) -> None:
        assert_renders(env, "[{{x}}]", {"x": None}, "[]")

    def test_numbers(self, env: Environment) -> None:
        assert_renders(env, "{{a}} {{b}}", {"a": 0, "b": 1.5}, "0 1.5")

    def test_values_are_not_rendered_as_templates(self, env: Environment) -> None:
        assert_renders(env, "{{x}}", {"x": "{{y}}", "y": "no"}, "{{y}}")

    def test_whitespace_inside_tag(self, env: Environment) -> None:
        assert_renders(env, "{{ x }}|{{{ x }}}|{{& x }}", {"x": "v"}, "v|v|v")

    def test_dotted_names(self, env: Environment) -> None:
        data = {"a": {"b": {"c": "d"}}}
        assert_renders(env, "{{a.b.c}}|{{a.b.missing}}|{{a.x.c}}", data, "d||")

    def test_dotted_index(self, env: Environment) -> None:
        assert_renders(env, "{{items.1}}", {"items": ["x", "y"]}, "y")

    def test_top_level_scalar(self, env: Environment) -> None:
        assert_renders(env, "{{.}}", "hi", "hi")

    def test_object_attributes(self, env: Environment) -> None:
        @dataclass
        class Person:
            name: str

        assert_renders(env, "{{#p}}{{name}}{{/p}}", {"p": Person("Ann")}, "Ann")


class TestSections:
    def test_list(self, env: Environment) -> None:
        assert_renders(env, "{{#items}}{{.}}{{/items}}", {"items": [1, 2, 3]}, "123")

    def test_list_of_records(self, env: Environment) -> None:
        data = {"people": [{"name": "Bob"}, {"name": "Tom"}]}
        assert_renders(env, "{{#people}}Hi {{name}}. {{/people}}", data, "Hi Bob. Hi Tom. ")

    def test_empty_list(self, env: Environment) -> None:
        assert_renders(env, "[{{#items}}x{{/items}}]", {"items": []}, "[]")

    def test_absent(self, env: Environment) -> None:
        assert_renders(env, "[{{#nope}}x{{/nope}}]", {}, "[]")

    def test_record_is_pushed(self, env: Environment) -> None:
        assert_renders(env, "{{#p}}{{n}}{{/p}}", {"p": {"n": "x"}}, "x")

    @pytest.mark.parametrize(("value", "expected"), [(True, "yes"), (False, ""), (0, ""), ("", "")])
    def test_truthiness(self, env: Environment, value: object, expected: str) -> None:
        assert_renders(env, "{{#t}}yes{{/t}}", {"t": value}, expected)

    def test_scalar_is_not_pushed(self, env: Environment) -> None:
        assert_renders(env, "{{#s}}{{s}}!{{/s}}", {"s": "hi"}, "hi!")

    def test_nested_lists(self, env: Environment) -> None:
        data = {"a": [[1, 2], [3]]}
        assert_renders(env, "{{#a}}{{#.}}{{.}}{{/.}};{{/a}}", data, "12;3;")

    def test_inner_scope_shadows_outer(self, env: Environment) -> None:
        data = {"outer": {"name": "o", "inner": {"name": "i"}}}
        assert_renders(env, "{{#outer}}{{#inner}}{{name}}{{/inner}}{{/outer}}", data, "i")

    def test_outer_scope_is_visible(self, env: Environment) -> None:
        data = {"name": "o", "inner": {"other": 1}}
        assert_renders(env, "{{#inner}}{{name}}{{/inner}}", data, "o")

    def test_siblings_do_not_leak(self, env: Environment) -> None:
        data = {"x": "outer", "a": {"x": "inner"}}
        assert_renders(env, "{{#a}}{{x}}{{/a}}{{x}}", data, "innerouter")

    def test_standalone_lines(self, env: Environment) -> None:
        assert_renders(env, "{{#a}}\nX\n{{/a}}\n", {"a": True}, "X\n")

    def test_standalone_list_lines(self, env: Environment) -> None:
        source = "<ul>\n  {{#items}}\n  <li>{{.}}</li>\n  {{/items}}\n</ul>\n"
        expected = "<ul>\n  <li>a</li>\n  <li>b</li>\n</ul>\n"
        assert_renders(env, source, {"items": ["a", "b"]}, expected)


class TestInvertedSections:
    def test_empty_list(self, env: Environment) -> None:
        assert_renders(env, "{{^items}}none{{/items}}", {"items": []}, "none")

    def test_non_empty_list(self, env: Environment) -> None:
        assert_renders(env, "{{^items}}none{{/items}}", {"items": [1]}, "")

    @pytest.mark.parametrize("value", [False, None, 0, ""])
    def test_falsey(self, env: Environment, value: object) -> None:
        assert_renders(env, "{{^f}}no{{/f}}", {"f": value}, "no")

    def test_absent(self, env: Environment) -> None:
        assert_renders(env, "{{^f}}no{{/f}}", {}, "no")

    def test_lambda_is_truthy(self, env: Environment) -> None:
        assert_renders(env, "{{^f}}no{{/f}}", {"f": lambda text: text}, "")

    def test_stack_unchanged(self, env: Environment) -> None:
        assert_renders(env, "{{^f}}{{x}}{{/f}}", {"f": False, "x": "v"}, "v")


class TestLambdas:
    def test_section_lambda(self, env: Environment) -> None:
        data = {"wrap": lambda text: f"<b>{text}</b>", "name": "Ann"}
        assert_renders(env, "{{#wrap}}Hi {{name}}{{/wrap}}", data, "<b>Hi Ann</b>")

    def test_section_lambda_receives_raw_body(self, env: Environment) -> None:
        seen = []

        def spy(text):
            seen.append(text)
            return ""

        env.render("{{#spy}}\n  {{x}} {{#y}}z{{/y}}\n{{/spy}}\n", {"spy": spy})
        assert seen == ["  {{x}} {{#y}}z{{/y}}\n"]

    def test_section_lambda_raw_body_excludes_end_tag_indent(self, env: Environment) -> None:
        seen = []

        def spy(text):
            seen.append(text)
            return text

        assert env.render("{{#l}}a  {{/l}}", {"l": spy}) == "a"
        assert seen == ["a"]

    def test_section_style_lambda_in_interpolation(self, env: Environment) -> None:
        data = {"wrap": lambda text: f"<b>{text}</b>"}
        assert_renders(env, "[{{wrap}}]", data, "[&lt;b&gt;&lt;/b&gt;]")
        assert callable(data["wrap"])

    def test_zero_argument_lambda_as_section(self, env: Environment) -> None:
        data = {"l": lambda: lambda: "y{{v}}", "v": 1}
        assert_renders(env, "{{#l}}x{{/l}}", data, "y1")

    def test_section_lambda_is_not_memoized(self, env: Environment) -> None:
        data = {"wrap": lambda text: text.upper()}
        env.render("{{#wrap}}a{{/wrap}}", data)
        assert callable(data["wrap"])

    def test_section_lambda_uses_section_delimiters(self, env: Environment) -> None:
        data = {"l": lambda text: text + "|v|", "v": 1}
        assert_renders(env, "{{=| |=}}|#l|x|/l|", data, "x1")

    def test_zero_argument_callable_is_a_value(self, env: Environment) -> None:
        assert_renders(env, "{{x}}", {"x": lambda: "<i>{{y}}</i>", "y": 1}, "&lt;i&gt;{{y}}&lt;/i&gt;")

    def test_interpolation_lambda_is_rendered(self, env: Environment) -> None:
        data = {"greet": lambda: lambda: "Hello {{planet}}", "planet": "World"}
        assert_renders(env, "{{greet}}", data, "Hello World")

    def test_interpolation_lambda_result_is_escaped(self, env: Environment) -> None:
        data = {"l": lambda: lambda: "<{{v}}>", "v": "&"}
        assert_renders(env, "{{l}}", data, "&lt;&amp;&gt;")

    def test_unescaped_interpolation_lambda(self, env: Environment) -> None:
        data = {"l": lambda: lambda: "<{{v}}>", "v": "&"}
        assert_renders(env, "{{{l}}}", data, "<&>")

    def test_interpolation_lambda_uses_default_delimiters(self, env: Environment) -> None:
        data = {"l": lambda: lambda: "{{v}}", "v": 2}
        assert_renders(env, "{{=| |=}}|l|", data, "2")

    def test_zero_argument_lambda_is_memoized(self, env: Environment) -> None:
        calls = []

        def make():
            calls.append(1)
            return "text"

        data = {"x": lambda: make}
        assert env.render("{{x}}{{x}}", data) == "texttext"
        assert calls == [1]
        assert data["x"] == "text"

    def test_plain_callables_are_called_each_time(self, env: Environment) -> None:
        counter = iter(range(1, 10))
        assert_renders(env, "{{n}}{{n}}", {"n": lambda: next(counter)}, "12")


class TestPartials:
    def test_partial_uses_current_context(self, env_with_loader: Environment) -> None:
        data = {"users": [{"name": "A"}, {"name": "B"}]}
        assert_renders(env_with_loader, "{{#users}}{{>user}}{{/users}}", data, "<b>A</b><b>B</b>")

    def test_missing_partial_is_empty(self, env_with_loader: Environment) -> None:
        assert_renders(env_with_loader, "[{{>nope}}]", {}, "[]")

    def test_no_loader_is_empty(self, env: Environment) -> None:
        assert_renders(env, "[{{>user}}]", {"name": "x"}, "[]")

    def test_standalone_partial_is_indented(self, env_with_loader: Environment) -> None:
        assert_renders(env_with_loader, "  {{>lines}}\n", {}, "  one\n  two\n")

    def test_inline_partial_is_not_indented(self, env_with_loader: Environment) -> None:
        assert_renders(env_with_loader, "> {{>lines}}", {}, "> one\ntwo\n")

    def test_indented_partial_with_section(self, env_with_loader: Environment) -> None:
        data = {"items": [1, 2]}
        assert_renders(env_with_loader, "  {{>list}}\n", data, "  - 1\n  - 2\n")

    def test_partial_without_trailing_newline(self) -> None:
        env = Environment(loader={"p": "a\nb"})
        assert_renders(env, "  {{>p}}\n", {}, "  a\n  b")

    def test_recursive_partial(self, env_with_loader: Environment) -> None:
        data = {
            "name": "r",
            "children": [{"name": "a", "children": []}, {"name": "b", "children": []}],
        }
        assert_renders(env_with_loader, "{{>node}}", data, "r(a)(b)")

    def test_partial_uses_default_delimiters(self) -> None:
        env = Environment(loader={"p": "{{x}}"})
        assert_renders(env, "{{=<% %>=}}<%>p%>", {"x": 1}, "1")

    def test_partials_argument_overrides_loader(self, env_with_loader: Environment) -> None:
        result = env_with_loader.render("{{>user}}", {"name": "n"}, {"user": "[{{name}}]"})
        assert result == "[n]"

    def test_runaway_recursion(self) -> None:
        env = Environment(loader={"loop": "{{>loop}}"}, max_partial_depth=5)
        with pytest.raises(TemplateRuntimeError) as exc_info:
            env.render("{{>loop}}", {})
        message = strip_colors(str(exc_info.value))
        assert "Maximum partial depth exceeded (5)" in message
        assert exc_info.value.template_stack[0] == "<template>"
        assert exc_info.value.template_stack[1:] == ["loop"] * 4


class TestDelimiters:
    def test_redefinition(self, env: Environment) -> None:
        assert_renders(env, "{{=<% %>=}}<%x%>{{x}}", {"x": "y"}, "y{{x}}")

    def test_sections_with_new_delimiters(self, env: Environment) -> None:
        assert_renders(env, "{{=<% %>=}}<%#a%><%.%><%/a%>", {"a": [1, 2]}, "12")

    def test_delimiters_reset_between_renders(self, env: Environment) -> None:
        assert env.render("{{=<% %>=}}<%x%>", {"x": 1}) == "1"
        assert env.render("{{x}}<%x%>", {"x": 1}) == "1<%x%>"

    def test_environment_default_delimiters(self) -> None:
        env = Environment(delimiters=("[[", "]]"))
        assert_renders(env, "[[x]] {{x}}", {"x": 1}, "1 {{x}}")
