"""Skill taxonomy - alias table, normalization and string similarity.

Every skill name that enters the engine, from the user's inventory or from a
role, is reduced to a comparable token by :func:`normalize`. Tokens are
case-folded and stripped of separators, then resolved through the alias
table so that ``"ReactJS"``, ``"react.js"`` and ``"React"`` all compare equal.
"""

import re

from pydantic import BaseModel, Field
from rapidfuzz.distance import Levenshtein


class SkillAlias(BaseModel):
    """A canonical skill name and the spellings that mean the same thing."""

    canonical: str = Field(description="Display name, e.g. 'Node.js'")
    aliases: list[str] = Field(default_factory=list)


SKILL_ALIASES: list[SkillAlias] = [
    # Languages
    SkillAlias(
        canonical="JavaScript",
        aliases=[
            "javascript", "js", "es6", "es2015", "es2016", "es2017", "es2018",
            "es2019", "es2020", "es2021", "es2022", "ecmascript",
        ],
    ),
    SkillAlias(canonical="TypeScript", aliases=["typescript", "ts", "type script"]),
    SkillAlias(canonical="Python", aliases=["python", "python3", "python 3", "py"]),
    SkillAlias(canonical="Java", aliases=["java", "java8", "java 8", "java11", "java 11", "java17", "java 17"]),
    SkillAlias(canonical="C#", aliases=["c#", "csharp", "c sharp", "c-sharp", ".net", "dotnet"]),
    SkillAlias(canonical="C++", aliases=["c++", "cpp", "c plus plus", "c-plus-plus"]),
    SkillAlias(canonical="PHP", aliases=["php", "php7", "php 7", "php8", "php 8"]),
    SkillAlias(canonical="Ruby", aliases=["ruby", "ruby on rails", "rails", "ror"]),
    SkillAlias(canonical="Go", aliases=["go", "golang", "go-lang"]),
    SkillAlias(canonical="Rust", aliases=["rust", "rust-lang", "rustlang"]),
    SkillAlias(canonical="Swift", aliases=["swift", "swift5", "swift 5", "ios swift"]),
    SkillAlias(canonical="Kotlin", aliases=["kotlin", "kotlin/jvm", "kotlin jvm"]),
    # Frontend
    SkillAlias(canonical="React", aliases=["react", "reactjs", "react.js", "react js", "react-js"]),
    SkillAlias(
        canonical="Angular",
        aliases=["angular", "angularjs", "angular.js", "angular js", "angular2", "angular 2", "angular4", "angular 4"],
    ),
    SkillAlias(canonical="Vue.js", aliases=["vue", "vuejs", "vue.js", "vue js", "vue-js"]),
    SkillAlias(canonical="Next.js", aliases=["nextjs", "next.js", "next js", "next-js"]),
    SkillAlias(canonical="Redux", aliases=["redux", "redux toolkit", "redux-toolkit", "rtk"]),
    SkillAlias(canonical="TailwindCSS", aliases=["tailwind", "tailwindcss", "tailwind css", "tailwind-css"]),
    SkillAlias(canonical="Bootstrap", aliases=["bootstrap", "bootstrap4", "bootstrap 4", "bootstrap5", "bootstrap 5"]),
    SkillAlias(canonical="Sass", aliases=["sass", "scss", "sass/scss", "syntactically awesome stylesheets"]),
    # Backend
    SkillAlias(canonical="Node.js", aliases=["nodejs", "node.js", "node js", "node-js", "node"]),
    SkillAlias(canonical="Express.js", aliases=["express", "expressjs", "express.js", "express js", "express-js"]),
    SkillAlias(canonical="GraphQL", aliases=["graphql", "graph ql", "apollo", "apollo graphql"]),
    SkillAlias(canonical="REST API", aliases=["rest", "rest api", "restful", "restful api", "api development"]),
    # Data stores
    SkillAlias(
        canonical="SQL",
        aliases=[
            "sql", "structured query language", "mysql", "postgresql", "postgres",
            "sqlite", "sql server", "oracle sql",
        ],
    ),
    SkillAlias(canonical="MongoDB", aliases=["mongodb", "mongo", "mongo db"]),
    SkillAlias(canonical="Redis", aliases=["redis", "redis cache", "redis-cache"]),
    # Cloud & DevOps
    SkillAlias(canonical="AWS", aliases=["aws", "amazon web services", "amazon aws", "aws cloud"]),
    SkillAlias(
        canonical="Docker",
        aliases=["docker", "containerization", "containers", "docker-compose", "docker compose"],
    ),
    SkillAlias(canonical="Kubernetes", aliases=["kubernetes", "k8s", "k8", "kube"]),
    SkillAlias(canonical="Git", aliases=["git", "github", "gitlab", "bitbucket", "version control"]),
    SkillAlias(
        canonical="CI/CD",
        aliases=[
            "ci/cd", "cicd", "continuous integration", "continuous deployment",
            "continuous delivery", "jenkins", "travis ci", "github actions",
        ],
    ),
    # Practices
    SkillAlias(
        canonical="Testing",
        aliases=[
            "testing", "unit testing", "integration testing", "test driven development",
            "tdd", "jest", "cypress", "selenium",
        ],
    ),
    SkillAlias(canonical="Agile", aliases=["agile", "scrum", "kanban", "agile methodology", "agile development"]),
    # Data & ML
    SkillAlias(
        canonical="Machine Learning",
        aliases=["ml", "machine learning", "artificial intelligence", "ai", "deep learning", "neural networks"],
    ),
    SkillAlias(
        canonical="Data Science",
        aliases=["data science", "data analysis", "data analytics", "pandas", "numpy", "jupyter"],
    ),
]

# Characters that carry meaning inside a token ("c#" vs "c++" vs "c").
_SIGNIFICANT_SYMBOLS = frozenset("#+")
_MAX_SKILL_NAME_LENGTH = 100


def _token(text: str) -> str:
    """Trim, case-fold and drop separators."""
    folded = text.strip().casefold()
    return "".join(ch for ch in folded if ch.isalnum() or ch in _SIGNIFICANT_SYMBOLS)


def _build_lookup(aliases: list[SkillAlias]) -> tuple[dict[str, str], dict[str, SkillAlias]]:
    token_to_canonical: dict[str, str] = {}
    by_canonical: dict[str, SkillAlias] = {}
    # Canonical names first so an alias can never shadow a canonical's own token.
    for entry in aliases:
        token_to_canonical.setdefault(_token(entry.canonical), _token(entry.canonical))
        by_canonical[_token(entry.canonical)] = entry
    for entry in aliases:
        canonical_token = _token(entry.canonical)
        for alias in entry.aliases:
            token_to_canonical.setdefault(_token(alias), canonical_token)
    return token_to_canonical, by_canonical


_TOKEN_TO_CANONICAL, _ALIAS_BY_CANONICAL = _build_lookup(SKILL_ALIASES)


def normalize(raw_name: str) -> str:
    """Reduce a raw skill name to its comparable token.

    Never fails: unknown names come back as the cleaned token itself.
    ``normalize(normalize(x)) == normalize(x)`` for every string.
    """
    token = _token(raw_name or "")
    return _TOKEN_TO_CANONICAL.get(token, token)


def is_known_skill(raw_name: str) -> bool:
    """True when *raw_name* resolves through the alias table."""
    return _token(raw_name or "") in _TOKEN_TO_CANONICAL


def canonical_name(raw_name: str) -> str:
    """Human-readable canonical form (``"k8s"`` -> ``"Kubernetes"``)."""
    entry = _ALIAS_BY_CANONICAL.get(normalize(raw_name))
    if entry is not None:
        return entry.canonical
    return (raw_name or "").strip()


def get_skill_aliases(raw_name: str) -> list[str]:
    """All known spellings of *raw_name*, canonical first, or ``[raw_name]``."""
    entry = _ALIAS_BY_CANONICAL.get(normalize(raw_name))
    if entry is None:
        return [raw_name]
    return [entry.canonical, *entry.aliases]


def similarity(a: str, b: str) -> float:
    """Normalized Levenshtein similarity in [0, 1].

    ``1 - distance / max(len(a), len(b))``; two empty strings are identical.
    """
    if not a and not b:
        return 1.0
    return float(Levenshtein.normalized_similarity(a, b))


def is_valid_skill_name(raw_name: str) -> bool:
    """Reject blanks, absurdly long strings and bare numbers."""
    if not raw_name:
        return False
    stripped = raw_name.strip()
    return 0 < len(stripped) <= _MAX_SKILL_NAME_LENGTH and not stripped.isdigit()


def clean_skill_name(raw_name: str) -> str:
    """Strip stray punctuation and collapse whitespace, keeping ``- . # +``."""
    cleaned = re.sub(r"[^\w\s\-.#+]", "", raw_name.strip())
    return re.sub(r"\s+", " ", cleaned).strip()
