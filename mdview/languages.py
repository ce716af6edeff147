"""Language keyword tables, aliases and detection heuristics."""

from __future__ import annotations

import logging

from .models import LanguageSpec

logger = logging.getLogger(__name__)

# Names handled by dedicated scanners rather than a keyword table
HTML = "html"
JSON = "json"
TEXT = "text"


def _spec(
    name: str,
    keywords: str,
    line_comment: str = "",
    block_comment_start: str = "",
    block_comment_end: str = "",
) -> LanguageSpec:
    return LanguageSpec(
        name=name,
        keywords=frozenset(word.casefold() for word in keywords.split()),
        line_comment=line_comment,
        block_comment_start=block_comment_start,
        block_comment_end=block_comment_end,
    )


LANGUAGES: dict[str, LanguageSpec] = {
    "csharp": _spec(
        "csharp",
        """
        using namespace public private protected internal class struct interface
        enum if else while for foreach do switch case default break continue
        return try catch finally throw new this base static readonly const var
        int string bool double float decimal char byte long short uint ulong
        ushort object void
        """,
        "//",
        "/*",
        "*/",
    ),
    "javascript": _spec(
        "javascript",
        """
        function var let const if else while for do switch case default break
        continue return try catch finally throw new this typeof instanceof true
        false null undefined class extends import export from async await
        Promise
        """,
        "//",
        "/*",
        "*/",
    ),
    "python": _spec(
        "python",
        """
        def class if elif else while for try except finally with as import from
        return yield break continue pass lambda and or not in is True False
        None self print len range str int float bool list dict tuple set
        """,
        "#",
        '"""',
        '"""',
    ),
    "sql": _spec(
        "sql",
        """
        select from where insert into values update set delete create table
        drop alter index view join inner left right outer full on as and or
        not null is in like between group by order having limit offset union
        all distinct primary key foreign references default case when then
        else end exists count sum avg min max
        """,
        "--",
        "/*",
        "*/",
    ),
    "bash": _spec(
        "bash",
        """
        if then else elif fi for while until do done case esac in function
        return break continue local export readonly declare echo exit set
        unset shift source
        """,
        "#",
    ),
    "css": _spec(
        "css",
        """
        color background font margin padding border width height display
        position top left right bottom float clear text-align font-size
        font-weight line-height text-decoration overflow z-index opacity
        """,
        "//",
        "/*",
        "*/",
    ),
    "java": _spec(
        "java",
        """
        abstract boolean break byte case catch char class const continue
        default do double else enum extends final finally float for if
        implements import instanceof int interface long native new package
        private protected public return short static super switch synchronized
        this throw throws try void volatile while true false null
        """,
        "//",
        "/*",
        "*/",
    ),
    "c": _spec(
        "c",
        """
        auto break case char const continue default do double else enum extern
        float for goto if inline int long register return short signed sizeof
        static struct switch typedef union unsigned void volatile while
        class namespace template typename public private protected virtual
        new delete nullptr true false bool
        """,
        "//",
        "/*",
        "*/",
    ),
}

ALIASES: dict[str, str] = {
    "cs": "csharp",
    "c#": "csharp",
    "csharp": "csharp",
    "js": "javascript",
    "javascript": "javascript",
    "jsx": "javascript",
    "ts": "javascript",
    "typescript": "javascript",
    "tsx": "javascript",
    "py": "python",
    "python": "python",
    "python3": "python",
    "sql": "sql",
    "bash": "bash",
    "sh": "bash",
    "shell": "bash",
    "zsh": "bash",
    "css": "css",
    "java": "java",
    "c": "c",
    "h": "c",
    "cpp": "c",
    "c++": "c",
    "html": HTML,
    "htm": HTML,
    "xml": HTML,
    "json": JSON,
    "text": TEXT,
    "txt": TEXT,
    "plain": TEXT,
    "plaintext": TEXT,
}


def resolve_language(declared: str) -> str:
    """Map a fence info string to a language name.

    Only the first word of the info string counts, compared case-insensitively.
    Unknown identifiers resolve to ``"text"``.

    Examples:
        resolve_language("TS")  # "javascript"
        resolve_language("python title=x.py")  # "python"
        resolve_language("brainfuck")  # "text"
    """
    words = declared.split()
    if not words:
        return TEXT
    return ALIASES.get(words[0].lower(), TEXT)


def detect_language(code: str) -> str:
    """Guess the language of undeclared code from substring heuristics.

    Checks run in a fixed order (C#, JavaScript, Python, HTML, CSS, JSON) and
    the first hit wins; anything else is plain text.

    Examples:
        detect_language("console.log(1)")  # "javascript"
        detect_language('{"a": 1}')  # "json"
    """
    sample = code.lower().strip()

    if any(
        hint in sample
        for hint in ("using system", "public class", "namespace", "console.writeline")
    ):
        language = "csharp"
    elif any(hint in sample for hint in ("function ", "const ", "let ", "console.log")):
        language = "javascript"
    elif any(hint in sample for hint in ("def ", "import ", "print(", "if __name__")):
        language = "python"
    elif any(hint in sample for hint in ("<!doctype", "<html", "<div", "</")):
        language = HTML
    elif (
        "{" in sample
        and "}" in sample
        and any(hint in sample for hint in ("color:", "font-", "margin"))
    ):
        language = "css"
    elif (sample.startswith("{") and sample.endswith("}")) or (
        sample.startswith("[") and sample.endswith("]")
    ):
        language = JSON
    else:
        language = TEXT

    logger.debug("Detected language %r for undeclared code block", language)
    return language
