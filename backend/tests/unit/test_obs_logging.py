import json
import logging

from matchfeed.obs import logging as obs_logging


def _record(**extra) -> logging.LogRecord:
	record = logging.LogRecord("matchfeed.test", logging.INFO, __file__, 1, "discovery_feed", None, None)
	for key, value in extra.items():
		setattr(record, key, value)
	return record


def test_json_formatter_includes_context_and_redacts():
	tokens = obs_logging.bind_context(request_id="req-1", route="/discovery/feed", user_id="me")
	try:
		line = obs_logging.JSONLogFormatter().format(_record(pool=12, phone_number="0700", tags=list(range(15))))
	finally:
		obs_logging.reset_context(tokens)

	payload = json.loads(line)
	assert payload["msg"] == "discovery_feed"
	assert payload["request_id"] == "req-1"
	assert payload["user_id"] == "me"
	assert payload["pool"] == 12
	assert payload["phone_number"] == "[redacted]"
	assert len(payload["tags"]) == 11
	assert obs_logging.current_request_id() is None


def test_info_sampling_keeps_warnings(monkeypatch):
	monkeypatch.setattr(obs_logging.settings, "obs_log_sampling_rate_info", 0.0)
	sampler = obs_logging.InfoSamplingFilter()
	warning = _record()
	warning.levelno = logging.WARNING

	assert sampler.filter(warning) is True
	assert sampler.filter(_record()) is False
