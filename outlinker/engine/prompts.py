"""Prompt construction for generative calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence

EXTERNAL_LINKING = "external_linking"
INTERNAL_LINKING = "internal_linking"


@dataclass(frozen=True)
class PromptProfile:
    """Writer profile fragments merged into prompts."""

    core_instructions: str = ""
    brand_voice: str = ""
    website_context: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "PromptProfile | None":
        if not data:
            return None
        return cls(
            core_instructions=str(data.get("coreInstructions") or data.get("core_instructions") or "").strip(),
            brand_voice=str(data.get("brandVoice") or data.get("brand_voice") or "").strip(),
            website_context=str(data.get("websiteContext") or data.get("website_context") or "").strip(),
        )


def build_prompt(instructions: str, request: str, profile: PromptProfile | None = None, purpose: str = "") -> str:
    """Join base instructions, applicable profile sections and the user request."""

    sections = [instructions.strip()]
    if profile is not None:
        if profile.core_instructions:
            sections.append(f"**Core Instructions:**\n{profile.core_instructions}")
        if profile.brand_voice and purpose in {EXTERNAL_LINKING, INTERNAL_LINKING}:
            sections.append(f"**Brand Voice Guidelines:**\n{profile.brand_voice}")
        if profile.website_context and purpose == INTERNAL_LINKING:
            sections.append(f"**INTERNAL LINKING CONTEXT (available website pages):**\n{profile.website_context}")
    sections.append(f"---\n\n**User Request:**\n{request.strip()}")
    return "\n\n".join(sections)


EXTERNAL_LINK_INSTRUCTIONS = """\
You are an SEO research analyst who sources authoritative, currently live external links.

Rules:
1. Use the web search tool for every link you suggest. Never suggest a URL from memory.
2. Prefer government (.gov), education (.edu), peer-reviewed research, major news and finance
   outlets, and recognised industry publications.
3. Prefer articles published in the last three years.
4. Link to specific articles, never to homepages or section fronts.
5. Never use personal blogs, free blogging platforms, forums, social networks or content farms.

Return ONLY a JSON array with up to 5 objects, no commentary. If nothing suitable is found return [].
Each object has exactly these keys:
  "url": the full URL found through search,
  "anchorText": the exact words inside "context" that should become the link,
  "context": the complete original sentence from the content, copied exactly.
"""


def external_link_request(content: str, keywords: Sequence[str]) -> str:
    guidance = ""
    if keywords:
        bullet_list = "\n".join(f"- {keyword}" for keyword in keywords)
        guidance = f"Guiding keywords (focus the search on these topics):\n{bullet_list}\n\n"
    return (
        "Find up to 5 places in the content below where an external link would help the reader, "
        "search for a recent authoritative article for each, and return the JSON array.\n\n"
        f"{guidance}"
        f"Content:\n{content}\n\n"
        'Example: [{"url": "https://...", "anchorText": "...", "context": "..."}]'
    )


INTERNAL_LINK_INSTRUCTIONS = """\
You are an SEO strategist specialising in internal linking. Choose relevant pages from the list
under "INTERNAL LINKING CONTEXT". Return ONLY a JSON array of URL strings taken from that list,
for example ["https://yourdomain.com/page-1"]. Do not add commentary.
"""


def internal_link_request(content: str, limit: int) -> str:
    return (
        f"Select up to {limit} of the most relevant URLs for internal links from the blog content below. "
        "Links must add value to the reader and fit the context.\n\n"
        f"Blog content:\n{content}"
    )


def summary_prompt(url: str) -> str:
    return (
        f"Provide a concise one to two sentence summary of the content at this URL: {url}. "
        "Focus on the main topic and purpose of the page. The summary helps decide when to link to it."
    )
