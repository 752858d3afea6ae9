# src/dev_autofix/application/prompts/repair_prompt.py
"""
Prompts for repairing a detected runtime or build error.
"""
import os

from dev_autofix.domain.ports.error_parser import ParsedError

LANGUAGE_TAGS = {
    ".ts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "jsx",
    ".mjs": "javascript",
    ".cjs": "javascript",
}


def language_for(file_path: str, default: str = "typescript") -> str:
    """Markdown code fence tag for a source file."""
    _, ext = os.path.splitext(file_path)
    return LANGUAGE_TAGS.get(ext.lower(), default)


def get_repair_prompt_template() -> str:
    return """Fix this {error_type} error in the codebase:

**Error:** {message}

**Location:** {location}

**Stack Trace:**
```
{stack_trace}
```

## Current content of `{file}`
```{language}
{file_content}
```

Instructions:
1. Read the file to understand the context
2. Identify the root cause of the error
3. Fix the error with a minimal, targeted change
4. Do NOT refactor unrelated code
5. Do NOT add comments explaining the fix
6. Just fix the bug and nothing else
7. Output *only* the complete corrected content of `{file}` within a single markdown code block (```{language} ... ```)

Focus on fixing this specific error. Be concise.
"""


def build_repair_prompt(error: ParsedError, file_content: str, language: str) -> str:
    return get_repair_prompt_template().format(
        error_type=error.type,
        message=error.message,
        location=error.location,
        stack_trace=error.stack_trace,
        file=error.file,
        language=language,
        file_content=file_content,
    )
