"""
Tests for portfolio.py - single-row owner, hero and about sections.
"""

import pytest

SECTIONS = {
    "owner": {"first_name": "Jane", "last_name": "Doe", "email": "jane@x.com", "github_url": "https://github.com/jane"},
    "hero": {"title": "Hi, I'm Jane", "subtitle": "Backend engineer", "cta_text": "Contact me"},
    "about": {"title": "About", "description": "I build APIs.", "highlights": ["5 years", "open source"]},
}


class TestSections:
    @pytest.mark.parametrize("section", sorted(SECTIONS))
    def test_empty_section_is_empty_object(self, client, section):
        response = client.get(f"/api/portfolio/{section}")
        assert response.status_code == 200
        assert response.json() == {}

    @pytest.mark.parametrize("section", sorted(SECTIONS))
    def test_first_put_creates_row(self, client, auth_headers, section):
        response = client.put(f"/api/portfolio/{section}", json=SECTIONS[section], headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"].endswith("updated")
        fetched = client.get(f"/api/portfolio/{section}").json()
        for key, value in SECTIONS[section].items():
            assert fetched[key] == value

    def test_second_put_replaces_same_row(self, client, auth_headers):
        first = client.put("/api/portfolio/hero", json=SECTIONS["hero"], headers=auth_headers).json()["data"]
        second = client.put("/api/portfolio/hero", json={"title": "New title"}, headers=auth_headers).json()["data"]

        assert second["id"] == first["id"]
        fetched = client.get("/api/portfolio/hero").json()
        assert fetched["title"] == "New title"
        assert fetched["subtitle"] is None

    def test_put_requires_token(self, client):
        response = client.put("/api/portfolio/about", json=SECTIONS["about"])
        assert response.status_code == 401
        assert client.get("/api/portfolio/about").json() == {}
