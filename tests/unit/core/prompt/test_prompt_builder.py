from __future__ import annotations

"""
Unit tests for prompt construction.

Verifies fresh vs. refresh templates, locale selection and that source code
containing format braces is embedded verbatim.
"""

from readme4ai.core.prompt.builder import build_prompt

TREE = "proj\n├── a.txt\n└── sub\n    └── b.txt"


def test_fresh_prompt_japanese_by_default() -> None:
    prompt = build_prompt("print('hi')", TREE)

    assert prompt.startswith("以下のソースコードのREADMEを日本語で作成してください。")
    assert "ソースコード:\nprint('hi')" in prompt
    assert prompt.endswith("フォルダの構成:\n" + TREE)
    assert "README:\n" not in prompt


def test_refresh_prompt_embeds_previous_readme() -> None:
    prompt = build_prompt("x = 1", TREE, "# Old README", language="ja")

    assert "README参考に" in prompt
    assert "README:\n# Old README\n\nソースコード:\nx = 1" in prompt


def test_empty_previous_readme_means_fresh() -> None:
    assert build_prompt("x", TREE, "", language="en") == build_prompt("x", TREE, None, language="en")


def test_english_prompt() -> None:
    prompt = build_prompt("x = 1", TREE, language="en")

    assert "README in English" in prompt
    assert "Source code:\nx = 1" in prompt
    assert "Folder structure:\n" + TREE in prompt


def test_braces_in_source_are_preserved() -> None:
    source = 'data = {"key": "{value}"}\nprint(f"{data}")'
    prompt = build_prompt(source, TREE, language="en")
    assert source in prompt


def test_unknown_language_falls_back_to_english() -> None:
    prompt = build_prompt("x", TREE, language="xx")
    assert "Source code:" in prompt
