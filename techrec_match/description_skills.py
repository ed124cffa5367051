"""Derive a skill list from a free-text job description.

Used as the least trusted skill source (``DESCRIPTION_DERIVED``) when a role
carries no explicit skill list. Extraction is pattern based: a vocabulary of
well-known technologies plus comma-separated lists following phrases such as
"experience with" or "tech stack:".
"""

from __future__ import annotations

import re

from .taxonomy import canonical_name, clean_skill_name, is_known_skill, is_valid_skill_name, normalize

_KNOWN_TERMS = [
    # Languages
    "JavaScript", "TypeScript", "Python", "Java", "C#", "C++", "PHP", "Ruby", "Rust",
    "Kotlin", "Scala", "Clojure", "Erlang", "Elixir", "Haskell", "F#", "VB.NET", "Perl", "MATLAB",
    # Frontend
    "React", "ReactJS", "React.js", "Angular", "Vue", "Vue.js", "Svelte", "Ember.js", "jQuery",
    "Bootstrap", "Tailwind", "TailwindCSS", "Material-UI", "Next.js", "NextJS", "Nuxt.js", "Gatsby",
    "Redux", "React Native",
    # Backend
    "Node.js", "NodeJS", "Express.js", "Django", "Flask", "FastAPI", "Spring Boot", "Laravel",
    "Ruby on Rails", "ASP.NET", "NestJS", "Fastify",
    # Data stores
    "MySQL", "PostgreSQL", "Postgres", "MongoDB", "Redis", "SQLite", "SQL Server",
    "MariaDB", "Cassandra", "DynamoDB", "Neo4j", "Elasticsearch", "SQL", "NoSQL",
    # Cloud & DevOps
    "AWS", "Azure", "Google Cloud", "GCP", "Heroku", "Vercel", "Firebase", "Supabase", "Docker",
    "Kubernetes", "K8s", "Jenkins", "GitHub Actions", "GitLab CI", "CircleCI", "Ansible",
    "Terraform", "Nginx", "Git", "CI/CD", "Linux",
    # Testing
    "Jest", "Mocha", "Cypress", "Selenium", "Playwright", "JUnit", "PyTest",
    # Data / ML
    "TensorFlow", "PyTorch", "Pandas", "NumPy", "Scikit-learn", "Keras", "Apache Spark", "Hadoop",
    # Styling & design
    "CSS", "SCSS", "Sass", "HTML", "Figma",
    # Protocols & practices
    "GraphQL", "RESTful", "gRPC", "WebSocket", "Microservices", "Serverless", "Agile", "Scrum",
    "Kanban", "TDD", "DevOps",
]

# Names that double as plain English words only count with their exact casing.
_CASE_SENSITIVE_TERMS = [
    "Go", "Golang", "R", "REST", "Express", "Spring", "Rails", "Swift", "Dart", "Julia", "Phoenix", "Oracle",
]

_REQUIREMENT_LIST = re.compile(
    r"(?:experience with|knowledge of|proficient in|skilled in|familiar with|expertise in"
    r"|technologies|tools|frameworks|languages|tech stack|technology stack|requirements|required)"
    r"[:\s]+([^.]+)",
    re.IGNORECASE,
)

_YEARS_OF_EXPERIENCE = [
    re.compile(
        r"(\d+)\+?\s*years?\s*(?:of\s*)?(?:experience\s*)?(?:with|in|using)\s+([A-Za-z.#+\s\-]+?)(?=\s*(?:and\b|,|\.|$))",
        re.IGNORECASE,
    ),
    re.compile(
        r"(?:minimum|at\s+least)\s*(\d+)\+?\s*years?\s*(?:with|in|of)\s+([A-Za-z.#+\s\-]+?)(?=\s*(?:and\b|,|\.|$))",
        re.IGNORECASE,
    ),
]

CATEGORY_MAPPINGS: dict[str, list[str]] = {
    "programming": ["JavaScript", "TypeScript", "Python", "Java", "C#", "C++", "PHP", "Ruby", "Go", "Rust"],
    "frontend": ["React", "Angular", "Vue.js", "Svelte", "jQuery", "Bootstrap", "TailwindCSS", "CSS", "HTML"],
    "backend": ["Node.js", "Express.js", "Django", "Flask", "Spring", "Laravel", "ASP.NET", "FastAPI"],
    "database": ["MySQL", "PostgreSQL", "MongoDB", "Redis", "SQLite", "SQL Server", "SQL"],
    "cloud": ["AWS", "Azure", "Google Cloud", "Firebase", "Heroku", "Vercel"],
    "devops": ["Docker", "Kubernetes", "Jenkins", "Git", "CI/CD", "Ansible", "Terraform"],
    "mobile": ["React Native", "Flutter", "Xamarin", "Ionic", "Swift", "Kotlin"],
    "design": ["Figma", "Sketch", "Adobe XD", "Photoshop", "SCSS", "Sass"],
}


def _term_pattern(terms: list[str], flags: int = 0) -> re.Pattern[str]:
    alternation = "|".join(re.escape(t) for t in sorted(terms, key=len, reverse=True))
    return re.compile(rf"(?<![\w.#+])(?:{alternation})(?![\w#+])", flags)


_TERMS_RE = _term_pattern(_KNOWN_TERMS, re.IGNORECASE)
_CASE_SENSITIVE_RE = _term_pattern(_CASE_SENSITIVE_TERMS)


def _add(found: dict[str, str], raw: str) -> None:
    cleaned = clean_skill_name(raw)
    if not is_valid_skill_name(cleaned) or (len(cleaned) < 2 and cleaned != "R"):
        return
    display = canonical_name(cleaned)
    found.setdefault(normalize(display), display)


def extract_skills_from_description(description: str) -> list[str]:
    """Return canonical skill names mentioned in *description*, first mention first."""
    if not description or not isinstance(description, str):
        return []

    found: dict[str, str] = {}
    mentions = [m for pattern in (_TERMS_RE, _CASE_SENSITIVE_RE) for m in pattern.finditer(description)]
    for match in sorted(mentions, key=lambda m: m.start()):
        _add(found, match.group(0))

    # "Experience with: React, Node.js, TypeScript" -- keep only items the taxonomy knows
    for match in _REQUIREMENT_LIST.finditer(description):
        for item in re.split(r"[,;|&\n]", match.group(1)):
            item = item.strip()
            if item and len(item) <= 30 and is_known_skill(item):
                _add(found, item)

    return list(found.values())


def extract_skills_with_experience(description: str) -> list[tuple[str, int]]:
    """Find ``(skill, years)`` pairs such as "5+ years of experience with Python".

    A skill mentioned by more than one phrase keeps its first year count.
    """
    results: list[tuple[str, int]] = []
    if not description:
        return results
    seen: set[str] = set()
    for pattern in _YEARS_OF_EXPERIENCE:
        for match in pattern.finditer(description):
            years = int(match.group(1))
            if not 0 < years <= 20:
                continue
            for skill in extract_skills_from_description(match.group(2)):
                token = normalize(skill)
                if token not in seen:
                    seen.add(token)
                    results.append((skill, years))
    return results


def score_description_skill_richness(description: str) -> int:
    """0-100 indication of how many distinct technical skills a description names."""
    count = len(extract_skills_from_description(description))
    if count == 0:
        return 0
    if count <= 2:
        return min(30, count * 15)
    if count <= 5:
        return min(60, 30 + (count - 2) * 10)
    return min(100, 60 + (count - 5) * 8)


def categorize_extracted_skills(description: str) -> dict[str, list[str]]:
    """Group extracted skills by technology area; unknown ones land in ``other``."""
    categories: dict[str, list[str]] = {name: [] for name in CATEGORY_MAPPINGS}
    categories["other"] = []
    lookup = {normalize(skill): category for category, skills in CATEGORY_MAPPINGS.items() for skill in skills}
    for skill in extract_skills_from_description(description):
        categories[lookup.get(normalize(skill), "other")].append(skill)
    return categories
