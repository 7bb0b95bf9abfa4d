"""Text transforms applied before a message reaches the presentation layer."""
import html
import re

# ```lang\n ... ``` with an optional language tag
CODE_BLOCK_PATTERN = re.compile(r"```(\w+)?\n([\s\S]*?)```")


def render_code_blocks(text: str) -> str:
    """
    Convert fenced code blocks into <pre><code> regions.

    Code bodies are HTML-escaped so markup inside a block is shown as text,
    never interpreted. Text outside the fences is returned unchanged.

    Args:
        text: Message text possibly containing fenced blocks

    Returns:
        Text with every fenced block replaced by an escaped HTML code region
    """
    def _replace(match: re.Match) -> str:
        lang = match.group(1) or "text"
        code = html.escape(match.group(2))
        return f'<pre><code class="language-{lang}">{code}</code></pre>'

    return CODE_BLOCK_PATTERN.sub(_replace, text)


def format_time(minutes: int) -> str:
    """Format a minute count as HH:MM."""
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def first_line(text: str) -> str:
    return text.split("\n", 1)[0]
