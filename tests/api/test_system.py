"""
系統 API 測試
"""


class TestHealth:
    """健康檢查測試"""

    def test_health_check(self, client):
        """測試健康檢查端點"""
        response = client.get("/api/v1/system/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == "0.1.0"
        assert "timestamp" in data
