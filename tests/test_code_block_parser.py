"""Tests for extracting source code from model responses."""

from dev_autofix.application.utils.code_block_parser import parse_llm_code_block

LONG_CODE = "import { useState } from 'react';\nexport default function App() { return null; }"


class TestParseLLMCodeBlock:
    """Tests for parse_llm_code_block."""

    def test_fenced_block_with_language(self):
        response = "Here is the fix:\n```tsx\nconst a = 1;\n```\nDone."

        assert parse_llm_code_block(response, "tsx") == "const a = 1;\n"

    def test_first_block_wins(self):
        response = "```js\nfirst();\n```\n```js\nsecond();\n```"

        assert parse_llm_code_block(response, "javascript") == "first();\n"

    def test_unterminated_block_with_enough_code(self):
        assert parse_llm_code_block(f"```typescript\n{LONG_CODE}") == LONG_CODE + "\n"

    def test_unterminated_short_block(self):
        assert parse_llm_code_block("```typescript\nx = 1") is None

    def test_empty_block(self):
        assert parse_llm_code_block("```ts\n\n```") is None

    def test_bare_code_response(self):
        assert parse_llm_code_block(LONG_CODE) == LONG_CODE + "\n"

    def test_prose_response(self):
        assert parse_llm_code_block("The error is caused by a missing null check in the loop body.") is None

    def test_empty_response(self):
        assert parse_llm_code_block("") is None
        assert parse_llm_code_block(None) is None
