import pytest

from pulseboard_backend.app.services.diagnostics import debug_report, mask_key

PROBED = "facebook/bart-large-cnn"


def test_mask_key():
    assert mask_key("") == "Not set"
    assert mask_key("hf_abcdefghijklmnop") == "hf_ab...lmnop"


@pytest.mark.asyncio
async def test_unconfigured_report_skips_probe(hub, unconfigured_client):
    report = await debug_report(unconfigured_client)

    assert report["status"] == "success"
    assert report["huggingFaceStatus"] == "Unchecked"
    assert report["modelInfo"] is None
    assert report["environmentInfo"]["huggingfaceApiKey"] == "Not set"
    assert hub.calls == []


@pytest.mark.asyncio
async def test_reachable_model_gets_test_call(hub, hf_client):
    hub.on(PROBED, [{"summary_text": "API works."}])

    report = await debug_report(hf_client)

    assert report["huggingFaceStatus"] == "Accessible"
    assert report["modelInfo"] == [{"summary_text": "API works."}]
    assert [c["method"] for c in hub.calls] == ["HEAD", "POST"]
    assert report["environmentInfo"]["huggingfaceApiKeyLength"] == len(hf_client.api_key)
    assert "hf_test_key" not in str(report)


@pytest.mark.asyncio
async def test_unreachable_model_reports_status(hub, hf_client):
    report = await debug_report(hf_client)

    assert report["huggingFaceStatus"] == "Error: 503 Service Unavailable"
    assert report["modelInfo"] is None
