"""Dagger CI module for the HashiStack hello service.

Runs the unit suite in isolated containers and starts the API next to
dev-mode Consul and Vault agents for end-to-end checks.
"""

import asyncio

import dagger as dg
from dagger import dag, function, object_type

CONSUL_IMAGE = "hashicorp/consul:1.17"
VAULT_IMAGE = "hashicorp/vault:1.15"


@object_type
class HashistackHelloCi:
    """CI pipeline for the HashiStack hello service, built on uv.

    This module provides:
    - Unit tests in isolated containers, across Python versions
    - The API as a Dagger service
    - Consul and Vault dev agents bound under the hostnames the API expects
    - End-to-end tests against the live stack
    """

    # Base container creation
    @function
    def test_container(
        self, source: dg.Directory, python_version: str = "3.12"
    ) -> dg.Container:
        """Create a base container with uv and source code.

        Args:
            source: Directory containing the source code
            python_version: Python version to use (default: 3.12)

        Returns:
            Container configured with uv and source code
        """
        uv_cache = dag.cache_volume("uv")

        return (
            dag.container()
            .from_(f"ghcr.io/astral-sh/uv:python{python_version}-bookworm-slim")
            .with_mounted_cache("/root/.cache/uv", uv_cache)
            .with_directory("/app", source)
            .with_workdir("/app")
            .with_env_variable("UV_SYSTEM_PYTHON", "1")
        )

    # Unit testing functions
    @function
    async def unit_test(
        self, source: dg.Directory, python_version: str = "3.12"
    ) -> str:
        """Run unit tests with pytest."""
        return await self.run_test(source, "tests/unit", python_version)

    @function
    async def unit_test_matrix(
        self, source: dg.Directory, versions: str = "3.10,3.11,3.12"
    ) -> str:
        """Run unit tests concurrently on multiple Python versions.

        Args:
            source: Directory containing the source code
            versions: Comma-separated list of Python versions

        Returns:
            Formatted test results for all versions
        """
        version_list = [v.strip() for v in versions.split(",")]

        async def test_version(version: str) -> tuple[str, str]:
            try:
                result = await self.unit_test(source, version)
                return version, f"Python {version}: PASSED\n{result}"
            except Exception as e:
                return version, f"Python {version}: FAILED\n{str(e)}"

        results = await asyncio.gather(*[test_version(v) for v in version_list])

        output_lines = ["=== MULTI-VERSION TEST RESULTS ===", ""]
        for _, result in results:
            output_lines.extend([result, "=" * 50, ""])

        return "\n".join(output_lines)

    @function
    async def run_test(
        self, source: dg.Directory, path: str, python_version: str = "3.12"
    ) -> str:
        """Run tests at a specific path.

        Args:
            source: Directory containing the source code
            path: Path to test files or directory
            python_version: Python version to use

        Returns:
            Test output from pytest
        """
        return await (
            self.test_container(source, python_version)
            .with_exec(["uv", "pip", "install", "-e", ".[test]"])
            .with_exec(["pytest", path, "-v", "--tb=short"])
            .stdout()
        )

    # HashiStack agents
    @function
    def consul_service(self) -> dg.Service:
        """Consul agent in dev mode, listening on 8500."""
        return (
            dag.container()
            .from_(CONSUL_IMAGE)
            .with_exposed_port(8500)
            .as_service(args=["consul", "agent", "-dev", "-client", "0.0.0.0"])
        )

    @function
    def vault_service(self, vault_token: str = "root") -> dg.Service:
        """Vault server in dev mode with a fixed root token, listening on 8200."""
        return (
            dag.container()
            .from_(VAULT_IMAGE)
            .with_env_variable("VAULT_DEV_ROOT_TOKEN_ID", vault_token)
            .with_env_variable("VAULT_DEV_LISTEN_ADDRESS", "0.0.0.0:8200")
            .with_exposed_port(8200)
            .as_service(args=["vault", "server", "-dev"])
        )

    # Service-related functions
    @function
    def api_service(
        self,
        source: dg.Directory,
        python_version: str = "3.12",
        with_agents: bool = True,
        vault_token: str = "root",
    ) -> dg.Service:
        """Create the API service for testing.

        The container gets DB_USER/DB_PASS like a deployed instance would,
        and, when with_agents is set, Consul and Vault bound as "consul"
        and "vault" so the hard-coded agent URLs resolve.

        Args:
            source: Directory containing the application code
            python_version: Python version to use (default: 3.12)
            with_agents: Bind dev-mode Consul and Vault services
            vault_token: Root token shared by Vault and the API

        Returns:
            A Dagger service running the API on port 8000
        """
        ctr = (
            self.test_container(source, python_version)
            .with_exec(["uv", "pip", "install", "-e", "."])
            .with_env_variable("DB_USER", "demo")
            .with_env_variable("DB_PASS", "demo-pass")
            .with_env_variable("VAULT_TOKEN", vault_token)
            .with_env_variable("UPSTREAM_TIMEOUT_SECONDS", "3")
        )
        if with_agents:
            ctr = ctr.with_service_binding("consul", self.consul_service()).with_service_binding(
                "vault", self.vault_service(vault_token)
            )
        return ctr.with_exposed_port(8000).as_service(
            args=["python", "-m", "hashistack_hello"]
        )

    @function
    async def test_api_service(
        self, source: dg.Directory, python_version: str = "3.12"
    ) -> str:
        """Smoke-test the API by sending HTTP requests with curl.

        Args:
            source: Directory containing the source code
            python_version: Python version to use

        Returns:
            Pretty-printed responses from every endpoint
        """
        api_svc = self.api_service(source, python_version)

        test_client = (
            dag.container()
            .from_("alpine:latest")
            .with_exec(["apk", "add", "--no-cache", "curl", "jq"])
            .with_service_binding("api", api_svc)
        )

        result_lines = ["=== API SERVICE TEST RESULTS ===", ""]
        for path in ["/version", "/null-safety-demo?firstName=Ada&email=valid", "/hello"]:
            pretty = await test_client.with_exec(
                ["sh", "-c", f"curl -s 'http://api:8000{path}' | jq ."]
            ).stdout()
            result_lines.extend([f"GET {path}:", pretty, ""])

        result_lines.append("All endpoints responded successfully!")
        return "\n".join(result_lines)

    @function
    async def integration_test(
        self,
        source: dg.Directory,
        python_version: str = "3.12",
        with_agents: bool = True,
    ) -> str:
        """Run the e2e suite against a live API service.

        Args:
            source: Directory containing the source code
            python_version: Python version to use
            with_agents: Bind Consul and Vault behind the API; without
                them /hello must still answer 200 with *_error keys

        Returns:
            Integration test results from pytest
        """
        api_svc = self.api_service(source, python_version, with_agents)

        return await (
            self.test_container(source, python_version)
            .with_service_binding("api", api_svc)
            .with_env_variable("API_BASE_URL", "http://api:8000")
            .with_exec(["uv", "pip", "install", "-e", ".[test]"])
            .with_exec(["pytest", "tests/e2e", "-v", "--tb=short"])
            .stdout()
        )
