"""Tests for techrec_match.description_skills - skills derived from free text."""

import pytest

from techrec_match.description_skills import (
    categorize_extracted_skills,
    extract_skills_from_description,
    extract_skills_with_experience,
    score_description_skill_richness,
)


class TestExtractSkillsFromDescription:
    def test_known_terms_in_order(self):
        skills = extract_skills_from_description("We need React, Node.js and PostgreSQL experience.")
        assert skills == ["React", "Node.js", "SQL"]

    def test_requirement_list(self):
        assert extract_skills_from_description("Tech stack: Python, Django, Docker.") == ["Python", "Django", "Docker"]

    def test_aliases_collapse(self):
        skills = extract_skills_from_description("ReactJS and React.js developers, React preferred")
        assert skills == ["React"]

    def test_case_insensitive_terms(self):
        assert extract_skills_from_description("knowledge of DOCKER and kubernetes") == ["Docker", "Kubernetes"]

    def test_ambiguous_words_need_exact_case(self):
        assert extract_skills_from_description("Ready to go the extra mile in spring") == []
        assert extract_skills_from_description("Services written in Go") == ["Go"]

    def test_symbols_distinguish_languages(self):
        assert extract_skills_from_description("Experience in C# or C++ is a plus") == ["C#", "C++"]

    def test_no_partial_word_matches(self):
        assert extract_skills_from_description("Javanese culture and Rubyist humour") == []

    @pytest.mark.parametrize("description", ["", None, "   "])
    def test_empty(self, description):
        assert extract_skills_from_description(description) == []


class TestExtractSkillsWithExperience:
    def test_years(self):
        pairs = extract_skills_with_experience("5+ years of experience with Python and 3 years in Docker.")
        assert pairs == [("Python", 5), ("Docker", 3)]

    def test_at_least(self):
        assert extract_skills_with_experience("At least 2 years with TypeScript.") == [("TypeScript", 2)]

    def test_implausible_years_ignored(self):
        assert extract_skills_with_experience("50 years of experience with Python.") == []

    def test_no_years(self):
        assert extract_skills_with_experience("Python developer wanted") == []


class TestRichness:
    @pytest.mark.parametrize(
        ("description", "expected"),
        [
            ("Friendly office, great coffee.", 0),
            ("Python", 15),
            ("Python and Docker", 30),
            ("Python, Docker, AWS", 40),
            ("Python, Docker, AWS, Redis, Terraform, Linux", 68),
        ],
    )
    def test_score(self, description, expected):
        assert score_description_skill_richness(description) == expected


class TestCategorize:
    def test_groups(self):
        categories = categorize_extracted_skills("Python, React, Docker and Figma; also Haskell")
        assert categories["programming"] == ["Python"]
        assert categories["frontend"] == ["React"]
        assert categories["devops"] == ["Docker"]
        assert categories["design"] == ["Figma"]
        assert categories["other"] == ["Haskell"]

    def test_all_categories_present(self):
        categories = categorize_extracted_skills("")
        assert set(categories) >= {"programming", "frontend", "backend", "database", "cloud", "devops", "other"}
        assert all(v == [] for v in categories.values())
