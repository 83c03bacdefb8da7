import pytest

from postman_api_gen.config import GeneratorConfig
from postman_api_gen.generator.aggregator import (
    FACADE_ASSET,
    assemble,
    list_services,
    load_assets,
    render_barrel,
    render_facade,
)


@pytest.fixture
def config(tmp_path):
    config = GeneratorConfig(destination=tmp_path / "api")
    config.services_dir.mkdir(parents=True)
    for name in ("users", "_delete", "rootRequests"):
        (config.services_dir / name).mkdir()
    return config


class TestListServices:
    def test_directories_only_sorted(self, config):
        (config.services_dir / "index.js").write_text("", encoding="utf-8")
        assert list_services(config.services_dir) == ["_delete", "rootRequests", "users"]

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            list_services(tmp_path / "nope")


class TestRenderBarrel:
    def test_imports_and_exports(self):
        barrel = render_barrel(["orders", "users"])
        assert "import { orders } from './orders';" in barrel
        assert "import { users } from './users';" in barrel
        assert "export { orders, users };" in barrel

    def test_reserved_service_exported_under_public_name(self):
        barrel = render_barrel(["_delete"])
        assert "import { _delete } from './_delete';" in barrel
        assert "export { _delete as delete };" in barrel


class TestRenderFacade:
    def test_slots_expanded(self):
        template = "class ApiManager {\n  {servicesFields}\n\n  {servicesGetters}\n}\n"
        facade = render_facade(template, ["users", "_delete"])

        assert "#usersService = this.proxyService(services.users());" in facade
        assert "#deleteService = this.proxyService(services.delete());" in facade
        assert "get users() {" in facade
        assert "return this.#deleteService;" in facade
        assert "@returns {ReturnType<typeof services.users>}" in facade
        assert "{servicesFields}" not in facade
        assert "{servicesGetters}" not in facade

    def test_shipped_template_has_slots(self):
        template = load_assets()[FACADE_ASSET]
        assert "{servicesFields}" in template
        assert "{servicesGetters}" in template
        assert "proxyService" in template


class TestAssemble:
    def test_writes_top_level_files(self, config):
        services = assemble(config)

        assert services == ["_delete", "rootRequests", "users"]
        assert (config.services_dir / "index.js").exists()
        for name in load_assets():
            assert (config.destination / f"{name}.js").exists()

    def test_facade_lists_every_service(self, config):
        assemble(config)
        facade = (config.destination / "ApiManager.js").read_text(encoding="utf-8")

        for name in ("users", "delete", "rootRequests"):
            assert f"get {name}() {{" in facade
        assert "{servicesFields}" not in facade

    def test_other_assets_copied_verbatim(self, config):
        assemble(config)
        assets = load_assets()
        for name, content in assets.items():
            if name == FACADE_ASSET:
                continue
            assert (config.destination / f"{name}.js").read_text(encoding="utf-8") == content

    def test_missing_services_directory_fails(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            assemble(GeneratorConfig(destination=tmp_path / "api"))
