"""Tests for rendering generated clients."""

import json

import pytest

from sdkgen.codegen import js_identifier, kotlin_string, literal, oneline, render, write_outputs
from sdkgen.config import Api
from sdkgen.errors import ConfigError, VerificationError
from sdkgen.languages import SWIFT

# Form data that is not a file cannot be sent by the generated clients.
_BAD_SPEC: dict = {
    "swagger": "2.0",
    "paths": {
        "/notes": {
            "post": {
                "operationId": "addNote",
                "parameters": [{"name": "text", "in": "formData", "type": "string"}],
                "responses": {"204": {"description": "Added"}},
            },
        },
    },
}


# Members named after Swift keywords.
_KEYWORD_SPEC: dict = {
    "swagger": "2.0",
    "paths": {
        "/settings": {
            "get": {
                "operationId": "getSettings",
                "responses": {"200": {"schema": {"$ref": "#/definitions/Settings"}}},
            },
        },
    },
    "definitions": {
        "Settings": {
            "type": "object",
            "properties": {
                "default": {"type": "string"},
                "as": {"type": "string"},
                "mode": {"type": "string", "enum": ["default", "custom"]},
            },
        },
    },
}

@pytest.fixture
def apis(feature_spec):
    return {
        "FeatureApi": Api(
            name="FeatureApi",
            class_name="FeatureAPI",
            base_path="",
            package_name="feature-api-client",
            document=feature_spec,
        ),
    }


class TestFilters:
    def test_oneline(self):
        assert oneline("Get a list\n  of   features ") == "Get a list of features"
        assert oneline(None) == ""

    def test_literal(self):
        assert literal("dark-blue") == '"dark-blue"'
        assert literal(3) == "3"

    def test_js_identifier(self):
        assert js_identifier("ClientData.Dev") == "ClientData_Dev"

    def test_kotlin_string(self):
        assert kotlin_string("costs $5") == "costs \\$5"


class TestRenderSwift:
    @pytest.fixture(autouse=True)
    def _render(self, apis):
        self.outputs = render(SWIFT, apis)
        self.source = self.outputs["FeatureApi.swift"]

    def test_files(self):
        assert set(self.outputs) == {"FeatureApi.swift", "FeatureApi.podspec"}

    def test_api_class(self):
        assert "open class FeatureAPIClass: SwaggerApi {" in self.source
        assert "public let FeatureAPI = FeatureAPIClass()" in self.source
        assert "open func getFeatures(" in self.source
        assert 'path: "/features/{tag}"' in self.source

    def test_optional_params(self):
        assert "sampleQuery: GetFeaturesSampleQuery? = nil," in self.source
        assert "client: ClientData," in self.source

    def test_models(self):
        assert "open class ClientData: SwaggerModel {" in self.source
        assert "    open class Dev: SwaggerModel {" in self.source
        assert "open class Cat: Pet {" in self.source
        assert 'case "Cat":' in self.source
        assert "public enum CatHuntingSkill: String, SwaggerEnum {" in self.source
        assert 'case clueless = "clueless"' in self.source

    def test_format_passed_through(self):
        assert 'format: "date-time"' in self.source
        assert 'format: "int64"' in self.source

    def test_podspec_version(self):
        assert 's.version      = "1.2.3"' in self.outputs["FeatureApi.podspec"]

    def test_keywords_escaped(self):
        apis = {"Settings": Api("Settings", "Settings", "", None, _KEYWORD_SPEC)}
        source = render(SWIFT, apis)["Settings.swift"]
        assert "public var `default`: String?" in source
        assert "public var `as`: String?" in source
        assert "self.`default` = `default`" in source
        assert '"default": `default`?.serialize(format: nil),' in source
        assert 'case `default` = "default"' in source
        assert "public var default:" not in source


class TestRenderKotlin:
    def test_files_and_content(self, apis):
        outputs = render("kotlin", apis)
        assert set(outputs) == {"FeatureAPI.kt"}
        source = outputs["FeatureAPI.kt"]
        assert "package com.example.webservices" in source
        assert "class FeatureAPIWebServices {" in source
        assert '@PUT("/pets/{id}/photo")' in source
        assert "@Multipart" in source
        assert "open class Pet (" in source
        assert "data class Cat (" in source
        assert ") : Pet(name, petType)" in source
        assert "enum class GetFeaturesSampleQuery(val value: String) {" in source

    def test_package_option(self, apis):
        source = render("kotlin", apis, {"package": "com.acme.api"})["FeatureAPI.kt"]
        assert "package com.acme.api" in source


class TestRenderJs:
    def test_files(self, apis, feature_spec):
        outputs = render("js", apis)
        assert set(outputs) == {"package.json", "babel.config.js", "index.js", "index.d.ts", "spec.json"}
        package = json.loads(outputs["package.json"])
        assert package["name"] == "feature-api-client"
        assert package["version"] == "1.2.3"
        assert "@babel/preset-env" in package["devDependencies"]
        assert "@babel/preset-env" in outputs["babel.config.js"]
        assert json.loads(outputs["spec.json"]) == feature_spec

    def test_client(self, apis):
        source = render("js", apis)["index.js"]
        assert "export class FeatureAPI {" in source
        assert ".query('sample_query', sampleQuery)" in source
        assert "getNoargs(hasNoArguments, $$fetchOptions) {" in source

    def test_snake_arguments(self, apis):
        source = render("js", apis, {"snake": True})["index.js"]
        assert ".query('sample_query', sample_query)" in source

    def test_typings(self, apis):
        source = render("js", apis)["index.d.ts"]
        assert 'export type CatHuntingSkill = "clueless" | "lazy" | "adventurous" | "aggressive";' in source
        assert "export interface ClientData_Dev {" in source
        assert "  dev: ClientData_Dev;" in source
        assert "export interface Cat extends Pet {" in source
        assert "  huntingSkill: CatHuntingSkill;" in source


class TestRenderErrors:
    def test_verification_failure(self):
        apis = {"Notes": Api("Notes", "Notes", "", None, _BAD_SPEC)}
        with pytest.raises(VerificationError) as excinfo:
            render("swift", apis)
        assert [d.category for d in excinfo.value.diagnostics] == ["form-data-type"]

    def test_unknown_language(self, apis):
        with pytest.raises(ConfigError, match="Unknown language"):
            render("cobol", apis)


class TestWriteOutputs:
    def test_writes_files(self, tmp_path):
        target = tmp_path / "out" / "client"
        written = write_outputs({"a.txt": "A", "b.txt": "B"}, target)
        assert written == [target / "a.txt", target / "b.txt"]
        assert (target / "b.txt").read_text(encoding="utf-8") == "B"
