from tactical_analysis.models import VerifiedMetadata
from tactical_analysis.prompts import build_file_prompt, build_link_prompt


def test_link_prompt_embeds_ground_truth():
    url = "https://youtu.be/ABC123?t=42"
    prompt = build_link_prompt(url, "ABC123", VerifiedMetadata(title="Team A vs Team B"), mode="fast")

    assert f"YOUTUBE LINK (copy exactly): {url}" in prompt
    assert '"videoId" must be exactly: ABC123' in prompt
    assert "title: Team A vs Team B" in prompt
    assert "channel: unavailable" in prompt
    assert f"Unable to safely identify the match in video {url}" in prompt
    assert f'"videoUrl": "{url}"' in prompt


def test_mode_only_changes_verbosity_guidance():
    metadata = VerifiedMetadata(title="Team A vs Team B", author="League")
    fast = build_link_prompt("https://youtu.be/ABC123", "ABC123", metadata, mode="fast")
    detailed = build_link_prompt("https://youtu.be/ABC123", "ABC123", metadata, mode="detailed")

    assert "MODE: FAST" in fast
    assert "MODE: DETAILED" in detailed
    assert fast.split("MODE:")[0] == detailed.split("MODE:")[0]


def test_file_prompt_requests_file_name_and_declared_error():
    prompt = build_file_prompt("final_2024.mp4")

    assert '"videoTitle" must be the file name: final_2024.mp4' in prompt
    assert '"videoUrl": null' in prompt
    assert '"error"' in prompt
