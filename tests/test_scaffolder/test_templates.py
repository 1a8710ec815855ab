"""Tests for Jinja2 template rendering (pagegen.scaffolder.templates).

Every planned file of every architecture is rendered with StrictUndefined,
so a context key the planner forgot fails here.
"""

from __future__ import annotations

from typing import Any

import pytest
from jinja2 import UndefinedError

from pagegen.config import Settings
from pagegen.models import FileRole, load_configuration
from pagegen.scaffolder import TemplateRenderer, plan_files


pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


def _render_all(document: dict[str, Any], settings: Settings, renderer: TemplateRenderer):
    planned = plan_files(load_configuration(document), settings)
    return {p.role: renderer.render_planned(p) for p in planned}


class TestTemplateRenderer:
    def test_lists_templates(self, renderer: TemplateRenderer):
        templates = renderer.list_templates()
        assert "ddd/entity.ts.j2" in templates
        assert "shared/page.tsx.j2" in templates
        assert renderer.list_templates("simplified") == ["simplified/list_component.tsx.j2"]
        assert renderer.list_templates("missing") == []

    def test_custom_filters(self, renderer: TemplateRenderer):
        assert "snake_case" in renderer.env.filters
        assert "pluralize" in renderer.env.filters

    def test_missing_variable_raises(self, renderer: TemplateRenderer):
        with pytest.raises(UndefinedError):
            renderer.render("ddd/entity.ts.j2", {})


class TestRenderDDD:
    def test_renders_every_file(
        self, settings: Settings, full_featured_document: dict[str, Any],
        renderer: TemplateRenderer,
    ):
        full_featured_document["architecture"] = "ddd"
        rendered = _render_all(full_featured_document, settings, renderer)
        assert set(rendered) == set(FileRole)
        for content in rendered.values():
            assert content.strip()
            assert "{{" not in content

    def test_entity_fields(
        self, settings: Settings, ddd_document: dict[str, Any], renderer: TemplateRenderer
    ):
        entity = _render_all(ddd_document, settings, renderer)[FileRole.ENTITY]
        assert "export interface Ticket" in entity
        assert "subject: string;" in entity
        assert "priority: number;" in entity

    def test_repository_uses_mock_rows(
        self, settings: Settings, ddd_document: dict[str, Any], renderer: TemplateRenderer
    ):
        rendered = _render_all(ddd_document, settings, renderer)
        repository = rendered[FileRole.REPOSITORY_IMPL]
        assert "const MOCK_TICKETS: Ticket[]" in repository
        assert "export class TicketRepository implements ITicketRepository" in repository
        assert "ITicketRepository" in rendered[FileRole.REPOSITORY_INTERFACE]
        assert "export class GetTicketsUseCase" in rendered[FileRole.USE_CASE]

    def test_repository_mock_rows_carry_column_values(
        self, settings: Settings, ddd_document: dict[str, Any], renderer: TemplateRenderer
    ):
        repository = _render_all(ddd_document, settings, renderer)[FileRole.REPOSITORY_IMPL]
        assert "id: '1'," in repository
        assert "subject: 'Subject 1'," in repository
        assert "status: 'Active'," in repository
        assert "priority: 10," in repository
        assert "openedAt: '2025-01-05T00:00:00.000Z'," in repository

    def test_page_title_is_a_string_literal(
        self, settings: Settings, ddd_document: dict[str, Any], renderer: TemplateRenderer
    ):
        ddd_document["pageName"] = "Admin's Users"
        page = _render_all(ddd_document, settings, renderer)[FileRole.PAGE]
        assert 'title: "Admin\\u0027s Users",' in page
        assert "{metadata.title}" in page
        assert "Admin's" not in page

    def test_list_component(
        self, settings: Settings, ddd_document: dict[str, Any], renderer: TemplateRenderer
    ):
        component = _render_all(ddd_document, settings, renderer)[FileRole.LIST_COMPONENT]
        assert "export function TicketList()" in component
        assert "new GetTicketsUseCase(new TicketRepository()).execute(query)" in component
        assert "handleSort('subject')" in component
        assert "handleSort('status')" not in component
        assert '<SelectItem value="Open">Open</SelectItem>' in component
        assert "framer-motion" not in component
        assert "@tanstack/react-query" not in component
        assert "import { Checkbox }" not in component

    def test_feature_flags_reach_component(
        self, settings: Settings, full_featured_document: dict[str, Any],
        renderer: TemplateRenderer,
    ):
        rendered = _render_all(full_featured_document, settings, renderer)
        component = rendered[FileRole.LIST_COMPONENT]
        assert "from 'framer-motion'" in component
        assert "staggerChildren: 0.1" in component
        assert "motion.create(TableRow)" in component
        assert "useQuery" in component
        assert "queryKey: ['ticket'" in component
        assert "import { Checkbox }" in component
        assert "import { Calendar }" in component
        assert "DropdownMenuCheckboxItem" in component
        assert "colSpan={ 7 }" in component

        transition = rendered[FileRole.PAGE_TRANSITION]
        assert "from 'framer-motion'" in transition
        assert "export default function Template" in transition

    def test_page(
        self, settings: Settings, ddd_document: dict[str, Any], renderer: TemplateRenderer
    ):
        page = _render_all(ddd_document, settings, renderer)[FileRole.PAGE]
        assert (
            "import { TicketList } from '@/modules/ticket/presentation/components/ticket-list';"
            in page
        )
        assert "<TicketList />" in page
        assert "Support Tickets" in page


class TestRenderSimplified:
    def test_renders_every_file(
        self, settings: Settings, simplified_document: dict[str, Any],
        renderer: TemplateRenderer,
    ):
        rendered = _render_all(simplified_document, settings, renderer)
        assert set(rendered) == {FileRole.LIST_COMPONENT, FileRole.PAGE}

    def test_inline_data_source(
        self, settings: Settings, simplified_document: dict[str, Any],
        renderer: TemplateRenderer,
    ):
        component = _render_all(simplified_document, settings, renderer)[FileRole.LIST_COMPONENT]
        assert "export interface User {" in component
        assert "const MOCK_DATA: User[]" in component
        assert "async function fetchUsers(" in component
        assert "setData(await fetchUsers(query))" in component
        assert "modules/" not in component

    def test_no_search_keys_without_string_columns(
        self, settings: Settings, simplified_document: dict[str, Any],
        renderer: TemplateRenderer,
    ):
        simplified_document["columns"] = [{"label": "Count", "key": "count", "type": "number"}]
        component = _render_all(simplified_document, settings, renderer)[FileRole.LIST_COMPONENT]
        assert "toLowerCase().includes(q)" not in component
        assert "count: number;" in component

    def test_mock_data_carries_column_values(
        self, settings: Settings, simplified_document: dict[str, Any],
        renderer: TemplateRenderer,
    ):
        component = _render_all(simplified_document, settings, renderer)[FileRole.LIST_COMPONENT]
        assert "name: 'Name 1'," in component
        assert "status: 'Pending'," in component
        assert "createdAt: '2025-01-01T00:00:00.000Z'," in component
