"""Static skill catalog.

Loaded once at import time and shared read-only by every analysis run.
"""

from __future__ import annotations

from collections.abc import Iterable

from skillscope.models import SkillCatalogEntry, SkillSource

_ANTHROPIC_SKILLS = "https://github.com/anthropics/skills/tree/main/skills"


def _skill(
    skill_id: str,
    name: str,
    source: SkillSource,
    domains: Iterable[str],
    work_patterns: Iterable[str],
    description: str,
    url: str | None = None,
) -> SkillCatalogEntry:
    return SkillCatalogEntry(
        skill_id=skill_id,
        name=name,
        source=source,
        domains=tuple(domains),
        work_patterns=tuple(work_patterns),
        description=description,
        url=url,
    )


SKILLS_CATALOG: tuple[SkillCatalogEntry, ...] = (
    # Official skills repository
    _skill(
        "canvas-design",
        "Canvas Design",
        SkillSource.ANTHROPIC,
        ["design", "creative", "visual"],
        ["poster-design", "visual-art", "art-generation"],
        "Create sophisticated visual art in PNG and PDF formats using a design-philosophy-first "
        "approach: 90% visual, 10% text.",
        f"{_ANTHROPIC_SKILLS}/canvas-design",
    ),
    _skill(
        "doc-coauthoring",
        "Doc Co-authoring",
        SkillSource.ANTHROPIC,
        ["writing", "documentation", "business"],
        ["co-authoring", "document-creation", "content-planning"],
        "A structured 3-stage workflow for co-authoring documentation, proposals, technical specs, "
        "and decision docs.",
        f"{_ANTHROPIC_SKILLS}/doc-coauthoring",
    ),
    _skill(
        "internal-comms",
        "Internal Comms",
        SkillSource.ANTHROPIC,
        ["communication", "business", "writing"],
        ["status-reporting", "newsletter-writing", "document-creation"],
        "Compose internal communications: 3P updates, newsletters, FAQs, status reports, "
        "leadership updates, and incident reports.",
        f"{_ANTHROPIC_SKILLS}/internal-comms",
    ),
    _skill(
        "mcp-builder",
        "MCP Server Builder",
        SkillSource.ANTHROPIC,
        ["development", "integration", "tooling"],
        ["api-integration", "server-building", "tool-creation"],
        "Build Model Context Protocol servers to connect Claude to external services across "
        "4 phases: research, implementation, review, evaluation.",
        f"{_ANTHROPIC_SKILLS}/mcp-builder",
    ),
    _skill(
        "skill-creator",
        "Skill Creator",
        SkillSource.ANTHROPIC,
        ["development", "tooling", "meta"],
        ["template-creation", "tool-creation", "automation"],
        "Interactive guide for building new Claude Skills with proper structure, progressive "
        "disclosure, and bundled resources.",
        f"{_ANTHROPIC_SKILLS}/skill-creator",
    ),
    _skill(
        "theme-factory",
        "Theme Factory",
        SkillSource.ANTHROPIC,
        ["design", "business", "presentation"],
        ["theming", "visual-styling", "presentation-design"],
        "Apply consistent professional styling with 10 pre-set themes (plus custom generation) "
        "to slides, docs, reports, and HTML pages.",
        f"{_ANTHROPIC_SKILLS}/theme-factory",
    ),
    _skill(
        "web-artifacts-builder",
        "Web Artifacts Builder",
        SkillSource.ANTHROPIC,
        ["development", "design", "web"],
        ["frontend-building", "component-creation", "web-development"],
        "Create multi-component HTML artifacts using React 18, TypeScript, Tailwind CSS, and "
        "40+ shadcn/ui components.",
        f"{_ANTHROPIC_SKILLS}/web-artifacts-builder",
    ),
    _skill(
        "webapp-testing",
        "Web App Testing",
        SkillSource.ANTHROPIC,
        ["development", "testing", "quality"],
        ["browser-testing", "test-writing", "debugging"],
        "Test local web applications using Playwright with automated server lifecycle "
        "management and DOM inspection.",
        f"{_ANTHROPIC_SKILLS}/webapp-testing",
    ),
    _skill(
        "brand-guidelines",
        "Brand Guidelines",
        SkillSource.ANTHROPIC,
        ["design", "marketing", "brand-identity"],
        ["brand-consistency", "styling", "document-creation"],
        "Apply consistent brand colors, typography, and visual identity across all documents "
        "and presentations.",
        f"{_ANTHROPIC_SKILLS}/brand-guidelines",
    ),
    _skill(
        "slack-gif-creator",
        "Slack GIF Creator",
        SkillSource.ANTHROPIC,
        ["creative", "communication", "design"],
        ["gif-animation", "visual-art", "content-planning"],
        "Create animated GIFs optimized for Slack with proper dimensions, frame rates, and "
        "easing functions.",
        f"{_ANTHROPIC_SKILLS}/slack-gif-creator",
    ),
    # Community skills
    _skill(
        "systematic-debugging",
        "Systematic Debugging",
        SkillSource.COMMUNITY,
        ["development", "debugging", "problem-solving"],
        ["debugging", "root-cause-analysis", "code-review"],
        "Four-phase debugging methodology enforcing root cause analysis before proposing fixes. "
        "From the Superpowers library.",
        "https://github.com/obra/superpowers/blob/main/skills/systematic-debugging",
    ),
    _skill(
        "tdd",
        "Test-Driven Development",
        SkillSource.COMMUNITY,
        ["development", "testing", "quality"],
        ["test-writing", "tdd", "code-review"],
        "Enforces TDD workflow: write tests before implementation code for any feature or "
        "bugfix. From the Superpowers library.",
        "https://github.com/obra/superpowers/tree/main/skills/test-driven-development",
    ),
    _skill(
        "d3js-viz",
        "D3.js Data Visualization",
        SkillSource.COMMUNITY,
        ["data", "visualization", "analysis"],
        ["chart-creation", "data-exploration", "dashboard-building"],
        "Create interactive data visualizations using D3.js for charts, dashboards, and data "
        "exploration.",
        "https://github.com/chrisvoncsefalvay/claude-d3js-skill",
    ),
    _skill(
        "content-research-writer",
        "Content Research Writer",
        SkillSource.COMMUNITY,
        ["writing", "marketing", "research"],
        ["content-planning", "blog-writing", "research-writing"],
        "Write high-quality content with research, citations, hooks, and iterative outlines "
        "for blogs, articles, and marketing copy.",
        "https://github.com/ComposioHQ/awesome-claude-skills/tree/master/content-research-writer",
    ),
    _skill(
        "revealjs",
        "Reveal.js Presentations",
        SkillSource.COMMUNITY,
        ["presentation", "business", "communication"],
        ["slide-creation", "presentation-design", "pitch-decks"],
        "Generate polished HTML presentations using the Reveal.js framework with themes, "
        "transitions, and speaker notes.",
        "https://github.com/ryanbbrown/revealjs-skill",
    ),
    _skill(
        "owasp-security",
        "OWASP Security Review",
        SkillSource.COMMUNITY,
        ["security", "development", "quality"],
        ["code-review", "security-testing", "debugging"],
        "OWASP Top 10:2025, ASVS 5.0, and Agentic AI security with code review checklists and "
        "secure patterns for 20+ languages.",
        "https://github.com/agamm/claude-code-owasp",
    ),
    _skill(
        "csv-summarizer",
        "CSV Data Summarizer",
        SkillSource.COMMUNITY,
        ["data", "analysis", "automation"],
        ["data-analysis", "data-exploration", "spreadsheet-creation"],
        "Automatically analyze CSVs: columns, distributions, missing data, and correlations "
        "for quick data understanding.",
        "https://github.com/coffeefuelbump/csv-data-summarizer-claude-skill",
    ),
    _skill(
        "ui-ux-guide",
        "UI/UX Design Guide",
        SkillSource.COMMUNITY,
        ["design", "ux", "development"],
        ["ui-design", "component-creation", "code-review"],
        "Modern UI/UX guidance covering CRAP principles, task-first UX, HCI laws, and "
        "interaction psychology for design reviews.",
        "https://github.com/oil-oil/oiloil-ui-ux-guide",
    ),
    _skill(
        "kanban",
        "Kanban Board",
        SkillSource.COMMUNITY,
        ["project-management", "productivity", "planning"],
        ["task-tracking", "project-planning", "automation"],
        "Markdown-based Kanban board with file-based cards, YAML frontmatter for "
        "status/priority/dependencies, no database required.",
        "https://github.com/mattjoyce/kanban-skill",
    ),
    _skill(
        "epub-creator",
        "EPUB Creator",
        SkillSource.COMMUNITY,
        ["writing", "publishing", "creative"],
        ["document-creation", "content-planning", "formatting"],
        "Convert markdown documents, chat summaries, or research reports into downloadable "
        "EPUB files for e-readers and Kindle.",
        "https://github.com/smerchek/claude-epub-skill",
    ),
)


def get_skill(
    skill_id: str,
    catalog: Iterable[SkillCatalogEntry] = SKILLS_CATALOG,
) -> SkillCatalogEntry | None:
    for skill in catalog:
        if skill.skill_id == skill_id:
            return skill
    return None


__all__ = ["SKILLS_CATALOG", "get_skill"]
