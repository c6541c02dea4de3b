"""Keyword dictionaries used by the classifier.

Insertion order matters: it is the tie-break order when two categories score
the same.
"""

from __future__ import annotations

DOMAIN_SOFTWARE = "Software Development"
DOMAIN_WRITING = "Writing & Content"
DOMAIN_DATA = "Data & Analysis"

PATTERN_DOCUMENTS = "Document creation"
PATTERN_DEBUGGING = "Code review & debugging"
PATTERN_AUTOMATION = "Automation & scripting"

DOMAIN_KEYWORDS: dict[str, tuple[str, ...]] = {
    DOMAIN_SOFTWARE: (
        "code", "function", "class", "api", "bug", "debug", "error", "typescript",
        "javascript", "python", "react", "component", "deploy", "git", "commit",
        "refactor", "variable", "import", "export", "npm", "package", "server",
        "database", "sql", "css", "html", "frontend", "backend", "endpoint",
        "framework", "library", "compile", "build", "test", "lint",
    ),
    DOMAIN_WRITING: (
        "write", "essay", "blog", "article", "draft", "edit", "tone", "rewrite",
        "paragraph", "outline", "headline", "copy", "proofread", "grammar",
        "narrative", "story", "content", "newsletter", "tweet", "post", "seo",
        "audience", "creative writing",
    ),
    DOMAIN_DATA: (
        "data", "csv", "spreadsheet", "chart", "graph", "analyze", "statistics",
        "dashboard", "metric", "kpi", "report", "trend", "visualization",
        "dataset", "excel", "pivot", "formula", "aggregate", "sql", "query",
    ),
    "Business & Strategy": (
        "strategy", "business", "plan", "market", "competitor", "revenue", "okr",
        "roadmap", "stakeholder", "pitch", "proposal", "budget", "pricing",
        "growth", "launch", "product", "customer", "user research", "mvp",
    ),
    "Design & Creative": (
        "design", "ui", "ux", "layout", "color", "font", "wireframe", "mockup",
        "figma", "prototype", "brand", "logo", "visual", "illustration",
        "svg", "canvas", "animation", "aesthetic", "responsive",
    ),
    "Research & Learning": (
        "research", "explain", "understand", "learn", "summary", "summarize",
        "compare", "difference", "how does", "what is", "overview", "pros cons",
        "literature", "study", "paper", "citation", "source",
    ),
    "Marketing & Growth": (
        "marketing", "campaign", "social media", "instagram", "linkedin",
        "email marketing", "conversion", "funnel", "ads", "branding",
        "engagement", "influencer", "analytics", "a/b test",
    ),
}

PATTERN_KEYWORDS: dict[str, tuple[str, ...]] = {
    PATTERN_DOCUMENTS: ("create", "generate", "write", "build", "make", "draft", "template"),
    PATTERN_DEBUGGING: ("review", "debug", "fix", "error", "issue", "broken", "wrong", "bug"),
    "Data transformation": ("convert", "transform", "parse", "extract", "format", "csv", "json"),
    "Brainstorming": ("ideas", "brainstorm", "suggest", "options", "alternatives", "creative"),
    "Editing & revision": ("edit", "revise", "improve", "polish", "rewrite", "refine", "feedback"),
    "Learning & explanation": ("explain", "how", "why", "what", "teach", "learn", "understand"),
    PATTERN_AUTOMATION: ("automate", "script", "batch", "cron", "schedule", "pipeline", "workflow"),
    "Project planning": (
        "plan",
        "roadmap",
        "milestone",
        "timeline",
        "scope",
        "requirements",
        "spec",
    ),
}

ARTIFACT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Code files": ("function", "class", "import", "export", ".py", ".ts", ".js", ".tsx"),
    "Documents & reports": ("report", "document", "memo", "brief", "whitepaper"),
    "Spreadsheets": ("spreadsheet", "excel", "csv", "table", "formula"),
    "Presentations": ("slide", "presentation", "deck", "powerpoint", "pptx"),
    "Emails & messages": ("email", "message", "subject line", "reply", "draft email"),
    "Web pages & UI": ("html", "css", "component", "page", "layout", "website"),
    "Lists & outlines": ("list", "outline", "bullet", "checklist", "todo"),
    "Creative content": ("story", "poem", "script", "dialogue", "narrative"),
}


__all__ = [
    "DOMAIN_KEYWORDS",
    "PATTERN_KEYWORDS",
    "ARTIFACT_KEYWORDS",
    "DOMAIN_SOFTWARE",
    "DOMAIN_WRITING",
    "DOMAIN_DATA",
    "PATTERN_DOCUMENTS",
    "PATTERN_DEBUGGING",
    "PATTERN_AUTOMATION",
]
