"""
Commit and daily summary prompt builders.

The calendar UI renders summaries as Markdown with inline HTML color spans,
so the prompts pin down headings, bullets, emoji prefixes and highlight
colors precisely.
"""

import json
from typing import Any

from gitcal.models.commit import Commit
from gitcal.services.commits.metrics import DailyMetrics, count_changed_lines

CRITICAL_COLOR = "#e11d48"
POSITIVE_COLOR = "#22c55e"

ADVANCED_FORMATTING = [
    "Advanced Formatting:",
    "1. For feature additions, prefix with 🆕",
    "2. For bug fixes, prefix with 🐛",
    "3. For performance improvements, prefix with ⚡",
    "4. For security improvements, prefix with 🔒",
    "5. For refactorings, prefix with ♻️",
    "6. For documentation, prefix with 📝",
    f'7. For critical items, wrap in <span style="color: {CRITICAL_COLOR}">critical text</span>',
    f'8. For positive impacts, wrap in <span style="color: {POSITIVE_COLOR}">positive text</span>',
    "9. For file paths or code elements, use `code` backticks",
]

SHORT_HASH_LENGTH = 7


def build_commit_summary_prompt(commit: Commit, repo_name: str) -> str:
    """
    Build the prompt for summarizing a single commit.

    Args:
        commit: Commit with its diff loaded
        repo_name: Repository label used for context

    Returns:
        Formatted prompt string
    """
    sections = [
        f'You are summarizing a git commit for the "{repo_name}" project '
        "for a Product Manager or Lead Developer.",
        "",
        f"Commit message: {commit.message}",
        f"Commit author: {commit.author}",
        f"Commit date: {commit.date.isoformat()}",
    ]

    if commit.summary:
        sections.append(f"Commit description: {commit.summary}")

    sections.extend(
        [
            "",
            "Diff:",
            commit.diff or "",
            "",
            "IMPORTANT FORMATTING GUIDELINES:",
            "Create a well-structured summary with the following sections "
            "using HTML/Markdown mixed formatting:",
            "",
            'SECTION 1: "WHAT CHANGED"',
            "- Use ### for the section heading (will be styled as a primary color)",
            "- A single concise sentence overview of the commit",
            "- Then 2-3 bullet points with specific technical details about what was changed",
            "- Be precise about components, files, or systems affected",
            "- For important points, use **bold** formatting",
            "",
            'SECTION 2: "TECHNICAL IMPACT" (When relevant)',
            "- Use ### for the section heading (will be styled as a primary color)",
            "- 1-2 bullet points describing technical impact",
            '- Include metrics if possible (e.g., "Reduced page load time by ~20%")',
            "- Note performance, security, or architectural implications",
            "- Wrap numbers/metrics in inline code blocks using backticks for emphasis",
            "",
            *ADVANCED_FORMATTING,
            "",
            "Follow these style rules:",
            "1. Use Markdown formatting with HTML for color highlights",
            "2. Be technical and specific, focusing on what and how (not why)",
            "3. Code elements should be in backticks (e.g., `function()`)",
            "4. Keep the entire summary concise (max 150 words)",
            "",
            "Example:",
            "",
            "### WHAT CHANGED",
            "Enhanced JWT authentication security in the auth middleware.",
            "",
            "- 🔒 Added explicit algorithm verification in `jwt.verify()` calls to prevent "
            f'<span style="color: {CRITICAL_COLOR}">signature bypass attacks</span>',
            "- 🔒 Implemented support for both `HS256` and `RS256` signature algorithms",
            "- 🐛 Updated error handling for invalid tokens with more specific error messages",
            "",
            "### TECHNICAL IMPACT",
            f'- Mitigated <span style="color: {CRITICAL_COLOR}">potential security vulnerability</span> '
            "that could allow forged tokens",
            "- Improved error logging for authentication failures, aiding in "
            f'<span style="color: {POSITIVE_COLOR}">faster troubleshooting</span>',
        ]
    )

    return "\n".join(sections)


def build_commit_digest(commits: list[Commit]) -> list[dict[str, Any]]:
    """Condense commits into the per-commit entries embedded in the daily prompt."""
    return [
        {
            "hash": commit.hash[:SHORT_HASH_LENGTH],
            "author": commit.author,
            "message": commit.message,
            "summary": commit.summary or "",
            "generatedSummary": commit.generated_summary or "",
            "linesChanged": count_changed_lines(commit.diff) if commit.diff else "unknown",
        }
        for commit in commits
    ]


def build_daily_summary_prompt(
    date: str,
    repo_full_name: str,
    commits: list[Commit],
    metrics: DailyMetrics,
) -> str:
    """
    Build the prompt for summarizing all commits of one day.

    Args:
        date: Calendar day as "YYYY-MM-DD"
        repo_full_name: Repository as "owner/repo"
        commits: The day's commits, oldest first
        metrics: Aggregate metrics over those commits

    Returns:
        Formatted prompt string
    """
    digest = json.dumps(build_commit_digest(commits), indent=2, ensure_ascii=False)

    sections = [
        f"You are creating a daily summary of git activity for {date} in repository "
        f"{repo_full_name} for a Product Manager or Lead Developer.",
        "",
        "Here are the commits from that day:",
        "",
        digest,
        "",
        "Additional metrics:",
        f"- Total commits: {metrics.total_commits}",
        f"- Unique contributors: {metrics.unique_authors}",
        f"- Estimated lines changed: {metrics.lines_changed}",
        f"- Complexity score: {metrics.complexity_score} (higher means more complex changes)",
        "",
        "IMPORTANT FORMATTING GUIDELINES:",
        "Create a well-structured report with the following sections "
        "using HTML/Markdown mixed formatting:",
        "",
        'SECTION 1: "SUMMARY OF CHANGES"',
        "- Use ## for the section heading (will be styled as a primary color)",
        "- Start with a concise 2-3 sentence overview of the day's work",
        "- Then list key changes as bullet points, grouped by type (features, fixes, refactoring)",
        "- Use technical, specific descriptions for each bullet point",
        "- For important points, use **bold** formatting",
        "",
        'SECTION 2: "TECHNICAL METRICS"',
        "- Use ## for the section heading (will be styled as a primary color)",
        "- Present specific metrics about the work completed",
        "- Mention affected components, systems, or areas of the codebase",
        "- Note any technical debt or items needing future attention",
        "- Include concrete numbers when possible",
        "- Wrap numbers/metrics in inline code blocks using backticks for emphasis",
        "",
        'SECTION 3: "NEXT STEPS" (Optional, only if clearly implied by the commits)',
        "- Use ## for the section heading (will be styled as a primary color)",
        "- Briefly suggest logical next steps or areas to focus on",
        "- Base this strictly on the commits analyzed, not speculation",
        "",
        *ADVANCED_FORMATTING,
        "10. For subsection titles, use ### (smaller headings)",
        "",
        "Example Output:",
        "",
        "## SUMMARY OF CHANGES",
        "Authentication system implementation and payment processing improvements "
        "were the main focus of today's development work.",
        "",
        "### Features",
        "- 🆕 Added OAuth2 authentication middleware to `api/auth/middleware.js`",
        "- 🆕 Implemented **password reset flow** with email notifications",
        "",
        "### Fixes",
        f'- 🐛 Fixed <span style="color: {CRITICAL_COLOR}">critical payment processing '
        "transaction failures</span>",
        "- 🔒 Enhanced JWT token validation with proper algorithm verification",
        "",
        "## TECHNICAL METRICS",
        "Today's work included `1` major feature (authentication) and `2` bug fixes across "
        "`7` files. The payment processing fix resolved an issue affecting "
        f'<span style="color: {POSITIVE_COLOR}">15% of transactions</span>.',
        "",
        "## NEXT STEPS",
        "The validation layer still needs refactoring to address technical debt "
        "and improve input sanitization.",
    ]

    return "\n".join(sections)
