"""Unit tests for the Hasura App Service layer."""
import json

import pulumi

from src.layers import layer_setup, layer_2_app

PLAN = "azure:appservice/servicePlan:ServicePlan"
WEB_APP = "azure:appservice/linuxWebApp:LinuxWebApp"

JWK_URL = "https://www.googleapis.com/service_accounts/v1/jwk/securetoken@system.gserviceaccount.com"


class TestBuildAppSettings:
    """Tests for build_app_settings()."""

    def test_exact_keys(self):
        settings = layer_2_app.build_app_settings("postgres://x", "admin-secret")
        assert set(settings) == {
            "HASURA_GRAPHQL_DATABASE_URL",
            "HASURA_GRAPHQL_JWT_SECRET",
            "HASURA_GRAPHQL_ADMIN_SECRET",
            "HASURA_GRAPHQL_ENABLE_CONSOLE",
            "HASURA_GRAPHQL_UNAUTHORIZED_ROLE",
            "WEBSITES_PORT",
        }

    def test_fixed_values(self):
        settings = layer_2_app.build_app_settings("postgres://x", "admin-secret")
        assert settings["HASURA_GRAPHQL_DATABASE_URL"] == "postgres://x"
        assert settings["HASURA_GRAPHQL_ADMIN_SECRET"] == "admin-secret"
        assert settings["HASURA_GRAPHQL_ENABLE_CONSOLE"] == "true"
        assert settings["HASURA_GRAPHQL_UNAUTHORIZED_ROLE"] == "anonymous"
        assert settings["WEBSITES_PORT"] == "8080"

    def test_jwt_secret_points_at_google_jwks(self):
        settings = layer_2_app.build_app_settings("postgres://x", "admin-secret")
        jwt = json.loads(settings["HASURA_GRAPHQL_JWT_SECRET"])
        assert jwt == {"type": "RS512", "jwk_url": JWK_URL}

    def test_jwt_secret_is_verbatim_literal(self):
        settings = layer_2_app.build_app_settings("postgres://x", "admin-secret")
        assert settings["HASURA_GRAPHQL_JWT_SECRET"] == (
            '{"type":"RS512", "jwk_url": "https://www.googleapis.com/service_accounts'
            '/v1/jwk/securetoken@system.gserviceaccount.com"}'
        )


class TestAppResources:

    @pulumi.runtime.test
    def test_plan_and_web_app(self, mocks, stack_settings, naming):
        rg = layer_setup.create_resource_group(stack_settings, naming)
        plan = layer_2_app.create_app_service_plan(stack_settings, naming, rg)
        app_settings = layer_2_app.build_app_settings(
            pulumi.Output.secret("postgres://db"), stack_settings.secret_password()
        )
        app = layer_2_app.create_web_app(stack_settings, naming, rg, plan, app_settings)

        def check(_):
            plan_inputs = mocks.inputs_of(PLAN, "hasura")
            assert plan_inputs["osType"] == "Linux"
            assert plan_inputs["skuName"] == "B1"
            assert plan_inputs["workerCount"] == 1

            app_inputs = mocks.inputs_of(WEB_APP, "hasura")
            assert app_inputs["servicePlanId"] == "hasura_id"
            assert app_inputs["siteConfig"]["alwaysOn"] is True
            stack = app_inputs["siteConfig"]["applicationStack"]
            assert stack["dockerImageName"] == "hasura/graphql-engine:latest"
            assert stack["dockerRegistryUrl"] == "https://index.docker.io"
            assert app_inputs["appSettings"]["HASURA_GRAPHQL_DATABASE_URL"] == "postgres://db"
            assert app_inputs["appSettings"]["HASURA_GRAPHQL_ADMIN_SECRET"] == "s3cretPass"

        return app.urn.apply(check)
