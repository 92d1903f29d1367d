"""Tests for themeforge.core.formatting."""

import pytest

from themeforge.core.formatting import (
    color_key_from_variable,
    css_variable_name,
    font_style_declarations,
    package_slug,
    scope_class_name,
    scope_from_class_name,
    semantic_declarations,
    semantic_selector,
    slugify,
    token_declarations,
    token_selector,
)
from themeforge.core.models import SemanticColor, SemanticStyle, TokenSettings


class TestVariableNames:
    def test_dots_become_dashes(self):
        assert css_variable_name("editor.background") == "--vscode-editor-background"

    def test_nested_key(self):
        assert css_variable_name("editorBracketHighlight.foreground1") == (
            "--vscode-editorBracketHighlight-foreground1"
        )

    def test_reverse_mapping(self):
        assert color_key_from_variable("editor-background") == "editor.background"

    def test_colliding_keys_share_a_name(self):
        assert css_variable_name("a.b-c") == css_variable_name("a.b.c")


class TestSelectors:
    def test_scope_class_replaces_non_alphanumerics(self):
        assert scope_class_name("entity.name.function") == "entity-name-function"
        assert scope_class_name("meta.tag.sgml.doctype") == "meta-tag-sgml-doctype"
        assert scope_class_name("a b*c") == "a-b-c"

    def test_scope_from_class_is_lossy(self):
        assert scope_from_class_name(scope_class_name("my-scope.foo")) == "my.scope.foo"

    def test_single_scope_selector(self):
        assert token_selector("comment", 0) == ".comment"

    def test_list_scope_selector(self):
        assert token_selector(("comment", "string.quoted"), 4) == ".comment, .string-quoted"

    def test_missing_scope_uses_position(self):
        assert token_selector(None, 7) == ".token-7"
        assert token_selector("", 2) == ".token-2"
        assert token_selector((), 3) == ".token-3"

    def test_semantic_selector(self):
        assert semantic_selector("variable.readonly") == ".semantic-token-variable-readonly"
        assert semantic_selector("*.deprecated") == ".semantic-token---deprecated"


class TestDeclarations:
    def test_font_style_tokens_in_source_order(self):
        assert font_style_declarations("bold italic") == [
            ("font-weight", "bold"),
            ("font-style", "italic"),
        ]

    def test_font_style_ignores_unknown_tokens(self):
        assert font_style_declarations("italic sparkly  underline") == [
            ("font-style", "italic"),
            ("text-decoration", "underline"),
        ]

    def test_strikethrough(self):
        assert font_style_declarations("strikethrough") == [("text-decoration", "line-through")]

    def test_empty_font_style(self):
        assert font_style_declarations("") == []
        assert font_style_declarations(None) == []

    def test_token_declarations_order(self):
        settings = TokenSettings(foreground="#888", background="#000", font_style="italic bold")
        assert token_declarations(settings) == [
            ("color", "#888"),
            ("background-color", "#000"),
            ("font-style", "italic"),
            ("font-weight", "bold"),
        ]

    def test_token_declarations_without_settings(self):
        assert token_declarations(None) == []
        assert token_declarations(TokenSettings()) == []

    def test_semantic_color(self):
        assert semantic_declarations(SemanticColor("#abcdef")) == [("color", "#abcdef")]

    def test_semantic_style_keeps_font_style_verbatim(self):
        value = SemanticStyle(foreground="#ff0000", font_style="bold underline")
        assert semantic_declarations(value) == [
            ("color", "#ff0000"),
            ("font-style", "bold underline"),
        ]


class TestSlug:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("My Theme", "my-theme"),
            ("  Rave1 -- Dark!! ", "rave1-dark"),
            ("Über Theme", "ber-theme"),
            ("already-ok", "already-ok"),
        ],
    )
    def test_slugify(self, name, expected):
        assert slugify(name) == expected

    def test_empty_slug_falls_back(self):
        assert slugify("!!!") == ""
        assert package_slug("!!!") == "custom-theme"


@pytest.mark.parametrize(
    "func",
    [
        css_variable_name,
        color_key_from_variable,
        scope_class_name,
        scope_from_class_name,
        token_selector,
        semantic_selector,
        font_style_declarations,
        token_declarations,
        semantic_declarations,
        slugify,
        package_slug,
    ],
)
def test_public_functions_are_documented(func):
    assert func.__doc__ and func.__doc__.strip()
