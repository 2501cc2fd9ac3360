"""
Centralized prompts for the tactical analysis pipeline.

Both prompts share the same JSON output template. The link prompt binds the
verified video identity into the request as ground truth.
"""

import json

from .models import AnalysisMode, VerifiedMetadata


# ============================================================================
# OUTPUT TEMPLATE
# ============================================================================
# Tactical payload shared by both prompts. Identity fields are prepended
# per prompt.

TEAM_PAIR = {"teamA": "", "teamB": ""}

ANALYSIS_PAYLOAD_TEMPLATE = {
    "teamA": "Team A",
    "teamB": "Team B",
    "score": "Actual final score",
    "matchSummary": "",
    "keyMoments": "",
    "matchContext": {
        "competition": "", "season": "", "stage": "",
        "matchDate": "", "stadium": "", "city": "",
    },
    "formations": {
        "teamA": {"shape": "", "starters": [], "bench": [], "functionalHighlights": ""},
        "teamB": {"shape": "", "starters": [], "bench": [], "functionalHighlights": ""},
    },
    "defensivePhase": {
        "teamA": {"positioning": "", "compactnessAndPressing": "", "transition": ""},
        "teamB": {"positioning": "", "compactnessAndPressing": "", "transition": ""},
    },
    "offensivePhase": {
        "teamA": {"buildUp": "", "chanceCreation": "", "finishingAndMovement": ""},
        "teamB": {"buildUp": "", "chanceCreation": "", "finishingAndMovement": ""},
    },
    "strategyAndBehaviour": {"tempoControlAndAdaptation": "", "setPieces": ""},
    "statistics": {
        "possession": dict(TEAM_PAIR),
        "shots": dict(TEAM_PAIR),
        "shotsOnTarget": dict(TEAM_PAIR),
    },
    "strengths": {"teamA": [], "teamB": []},
    "weaknesses": {"teamA": [], "teamB": []},
    "playerAnalysis": [],
    "conclusionsAndRecommendations": "",
    "auditVerification": {
        "identifiedMatch": "", "mainSources": [],
        "notes": "", "confidenceLevel": "high | medium | low",
    },
}


def _render_template(identity: dict) -> str:
    template = dict(identity)
    template.update(ANALYSIS_PAYLOAD_TEMPLATE)
    return json.dumps(template, indent=2, ensure_ascii=False)


# ============================================================================
# LINK ANALYSIS PROMPT
# ============================================================================
# Used by: pipeline.py (link path, with Google Search grounding)
# Output: JSON analysis echoing videoUrl, videoId and videoTitle

MODE_GUIDANCE = {
    "fast": "FAST: keep every text field short (one or two sentences); prioritize score, formations and key moments.",
    "detailed": "DETAILED: fill every field thoroughly, with concrete tactical examples and player-level observations.",
}


def identification_error_message(url: str) -> str:
    return f"Unable to safely identify the match in video {url}. Please check the link."


def build_link_prompt(url: str, video_id: str, metadata: VerifiedMetadata, mode: AnalysisMode = "fast") -> str:
    """
    Build the grounded analysis prompt for a verified YouTube link.

    Args:
        url: URL exactly as supplied by the user
        video_id: Identifier extracted from the URL
        metadata: Title/author verified through oEmbed
        mode: "fast" or "detailed" (verbosity only)
    """
    output_template = _render_template({
        "videoTitle": "EXACT VIDEO TITLE",
        "videoUrl": url,
        "videoId": video_id,
    })

    return f"""TACTICAL ANALYSIS SYSTEM: ACCURACY AND TRACEABILITY

MANDATORY REFERENCE:
- YOUTUBE LINK (copy exactly): {url}
- EXPECTED_VIDEO_ID: {video_id}
- VERIFIED METADATA (oEmbed):
  - title: {metadata.title}
  - channel: {metadata.author or "unavailable"}

CRITICAL RULES:
1) DO NOT swap this video for another one. Analyze ONLY the video with EXPECTED_VIDEO_ID.
2) "videoUrl" must be EXACTLY the link provided (do not shorten, normalize or strip parameters).
3) "videoId" must be exactly: {video_id}
4) "videoTitle" must correspond to the verified oEmbed title (small differences such as emoji or spacing are fine).
5) If you cannot identify the match safely, return an error (do not guess).

ERROR GUIDELINE:
Return a JSON object containing "error" with:
"{identification_error_message(url)}"

MODE: {MODE_GUIDANCE[mode]}

OUTPUT (JSON only):
{output_template}
"""


# ============================================================================
# FILE ANALYSIS PROMPT
# ============================================================================
# Used by: pipeline.py (file path, frames only, no grounding)

def build_file_prompt(file_name: str) -> str:
    """Build the frames-only analysis prompt for an uploaded video."""
    output_template = _render_template({
        "videoTitle": file_name,
        "videoUrl": None,
    })

    return f"""You are a tactical analyst. From the attached frames, identify the match and produce a JSON analysis.

Rules:
- "videoTitle" must be the file name: {file_name}
- "videoUrl" must be omitted or null.
- Base the analysis only on what is visible in the frames (kits, scoreboard, on-screen graphics, players).
- If the teams or the score cannot be identified with confidence, return a JSON object with "error" (do not guess).

OUTPUT (JSON only):
{output_template}
"""
