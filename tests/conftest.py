import os
import sys

import pulumi
import pytest

# Make the project root importable (src.*) without installing the package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Pulumi's wire signature marking a secret value inside a property struct
SECRET_SIG_KEY = "4dabf18193072939515e22adb298388d"


def unwrap_secrets(value):
    """Strip secret wrappers from deserialized resource inputs."""
    if isinstance(value, dict):
        if SECRET_SIG_KEY in value and "value" in value:
            return unwrap_secrets(value["value"])
        return {k: unwrap_secrets(v) for k, v in value.items()}
    if isinstance(value, list):
        return [unwrap_secrets(v) for v in value]
    return value


class RecordingMocks(pulumi.runtime.Mocks):
    """
    Pulumi mocks that echo inputs back as state and record every registration.

    Provider-computed attributes used by the program (server FQDN, web app
    hostname, public IP address) are filled in with deterministic values.
    Resources without an explicit ``name`` input get their logical name, the
    way auto-naming would without the random suffix.
    """

    def __init__(self):
        self.resources = {}
        self.secret_inputs = {}

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        inputs = unwrap_secrets(dict(args.inputs))
        state = dict(inputs)
        state.setdefault("name", args.name)

        if args.typ == "azure:postgresql/server:Server":
            state["fqdn"] = f"{state['name']}.postgres.database.azure.com"
        elif args.typ == "azure:appservice/linuxWebApp:LinuxWebApp":
            state["defaultHostname"] = f"{state['name']}.azurewebsites.net"
        elif args.typ == "azure:network/publicIp:PublicIp":
            state["ipAddress"] = "20.30.40.50"

        self.resources[(args.typ, args.name)] = inputs
        self.secret_inputs[(args.typ, args.name)] = {
            key for key, value in args.inputs.items()
            if isinstance(value, dict) and SECRET_SIG_KEY in value
        }
        return [f"{args.name}_id", state]

    def call(self, args: pulumi.runtime.MockCallArgs):
        return {}

    def inputs_of(self, typ: str, name: str) -> dict:
        return self.resources[(typ, name)]

    def secret_input_keys(self, typ: str, name: str) -> set:
        """Top-level inputs that reached the engine marked as secret."""
        return self.secret_inputs[(typ, name)]

    def types(self) -> list:
        return sorted(typ for typ, _ in self.resources if typ.startswith("azure:"))


MOCKS = RecordingMocks()
pulumi.runtime.set_mocks(MOCKS, preview=False)


@pytest.fixture
def mocks():
    """The shared RecordingMocks instance, cleared for each test."""
    MOCKS.resources.clear()
    MOCKS.secret_inputs.clear()
    return MOCKS


@pytest.fixture
def stack_settings():
    from src.core.context import StackSettings

    return StackSettings(
        resource_group="ruhe-test",
        pg_user="ruheadmin",
        pg_password="s3cretPass",
        location="westeurope",
        db_name="ruhe",
        mode="DEBUG",
    )


@pytest.fixture
def naming():
    from src.naming import RuheNaming

    return RuheNaming()
