"""
基础接口集成测试
测试应用的基础功能，包括健康检查、根路径和文档地址
"""

import pytest
from fastapi.testclient import TestClient

from main import app


@pytest.mark.integration
@pytest.mark.basic
class TestBasicEndpoints:
    """基础端点集成测试类"""

    def setup_method(self):
        self.client = TestClient(app)

    def test_root(self):
        response = self.client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "AI Platform Video API"
        assert "version" in data
        assert data["docs"] == "/api/v1/docs"

    def test_health(self):
        response = self.client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_openapi_lists_video_routes(self):
        response = self.client.get("/api/v1/openapi.json")
        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/v1/video/generate" in paths
        assert "/api/v1/video/models" in paths
