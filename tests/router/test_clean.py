from pulseboard_router.core.clean import build_prompt, clean_generated_text


def test_build_prompt_keeps_last_turns_and_appends_markers():
    history = [f"Human: q{i}" for i in range(15)]
    prompt = build_prompt(history, "  what now?  ", max_turns=10)
    lines = prompt.split("\n")
    assert lines[0] == "Human: q5"
    assert lines[-2] == "Human: what now?"
    assert lines[-1] == "AI:"
    assert len(lines) == 12


def test_build_prompt_skips_blank_history_lines():
    prompt = build_prompt(["Human: hi", "", "   ", "AI: hello"], "ok")
    assert prompt == "Human: hi\nAI: hello\nHuman: ok\nAI:"


def test_build_prompt_without_history():
    assert build_prompt([], "hey", max_turns=0) == "Human: hey\nAI:"


def test_clean_generated_text_strips_echo_and_leaked_turn():
    raw = "Human: hi\nAI:   Sure,   I can help.\nHuman: thanks"
    assert clean_generated_text(raw) == "Sure, I can help."


def test_clean_generated_text_plain_answer():
    assert clean_generated_text("  Paris\n is nice ") == "Paris is nice"
    assert clean_generated_text("") == ""


def test_clean_generated_text_drops_echoed_history():
    prompt = build_prompt(["Human: hi", "AI: Hello there friend!"], "what is a bond?")
    raw = prompt + " A bond is a loan to an issuer."
    assert clean_generated_text(raw, prompt=prompt) == "A bond is a loan to an issuer."


def test_clean_generated_text_loose_echo_resumes_after_current_turn():
    prompt = build_prompt(["Human: hi", "AI: Hello there friend!"], "what is a bond?")
    raw = "Human: hi\nAI:  Hello there  friend!\nHuman: what is a bond?\nAI: A bond is a loan.\nHuman: thanks"
    assert clean_generated_text(raw, prompt=prompt) == "A bond is a loan."
