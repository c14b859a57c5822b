import pytest

pytestmark = pytest.mark.unit


class TestSensitiveDataMasking:
    def test_cpf_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "cpf": "123.456.789-00"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "123.456.789-00" not in result["cpf"]
        assert "***MASKED***" in result["cpf"]

    def test_unformatted_cpf_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "customer.lookup", "tax_id": "59860184275"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["tax_id"] == "***MASKED***"

    def test_already_masked_tax_id_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "customer.registered", "tax_id": "***4275"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["tax_id"] == "***4275"

    def test_token_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "customer.updated", "customer_id": 42}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["customer_id"] == 42
        assert result["event"] == "customer.updated"
