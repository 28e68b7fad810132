"""
Test cases for REST service blueprint extraction.

This module tests that annotated JAX-RS style services are turned into
blueprints:
1. Class @Path and method @Path/verb markers merge into the endpoint
2. Parameters, imports and framework tagging flow into each blueprint
3. Files without a service root, or that do not parse, contribute nothing
"""

import os

import pytest

from websocketizer.extractors.java.rest_service_extractor import RestServiceExtractor
from websocketizer.models.domain_models import (
    BufferPolicy,
    Framework,
    InputParam,
    MethodType,
    OutcomeStatus,
    ParamType,
)

USER_RESOURCE = """
package com.example.api;

import javax.ws.rs.*;
import com.example.model.User;

@Path("/users")
public class UserResource {

    @GET
    @Path("/{id}")
    public User find(@PathParam("id") long userId, @HeaderParam("X-Token") String token) {
        return null;
    }

    @POST
    @PUT
    public Response save(User user) {
        return null;
    }

    @DELETE
    public void remove(@PathParam("id") long id) {
    }

    public String helper() {
        return "";
    }
}
"""


def by_verb(blueprints):
    return {b.method_type: b for b in blueprints}


class TestRestServiceExtractor:
    """Test end-to-end extraction over a project directory."""

    @pytest.fixture
    def extractor(self):
        return RestServiceExtractor(buffer_policy=BufferPolicy.PER_CLASS)

    @pytest.fixture
    def user_resource(self, write_java):
        return write_java("src/main/java/com/example/api/UserResource.java", USER_RESOURCE)

    def test_extracts_one_blueprint_per_verb(self, extractor, write_java, user_resource):
        blueprints = extractor.extract_blueprints(write_java.root)

        assert len(blueprints) == 3
        verbs = by_verb(blueprints)
        assert set(verbs) == {MethodType.GET, MethodType.POST, MethodType.PUT}
        assert verbs[MethodType.GET].endpoint == "/users/{id}/GET"
        assert verbs[MethodType.POST].endpoint == "/users/POST"
        assert verbs[MethodType.PUT].endpoint == "/users/PUT"

    def test_blueprint_metadata(self, extractor, write_java, user_resource):
        blueprint = by_verb(extractor.extract_blueprints(write_java.root))[MethodType.GET]

        assert blueprint.class_name == "UserResource"
        assert blueprint.package_name == "com.example.api"
        assert blueprint.request_context.class_path == "com.example.api.UserResource"
        assert blueprint.handler.method_name == "find"
        assert blueprint.handler.method_type is MethodType.GET
        assert blueprint.framework is Framework.DEFAULT

    def test_annotated_parameters_use_annotation_key(self, extractor, write_java, user_resource):
        blueprint = by_verb(extractor.extract_blueprints(write_java.root))[MethodType.GET]

        assert blueprint.inputs == (
            InputParam("userId", "id", "long", ParamType.PATH),
            InputParam("token", "X-Token", "String", ParamType.HEADER),
        )

    def test_two_verbs_share_parameters_and_resolve_imports(self, extractor, write_java, user_resource):
        verbs = by_verb(extractor.extract_blueprints(write_java.root))

        expected = (InputParam("user", "user", "com.example.model.User", ParamType.BODY),)
        assert verbs[MethodType.POST].inputs == expected
        assert verbs[MethodType.PUT].inputs == expected
        assert verbs[MethodType.POST].handler.method_name == "save"
        assert verbs[MethodType.PUT].handler.method_name == "save"

    def test_source_and_output_locations(self, extractor, write_java, user_resource):
        blueprint = extractor.extract_blueprints(write_java.root)[0]

        project = str(write_java.root.absolute())
        assert blueprint.source_dir == project + os.sep + os.path.join("src", "main", "java") + os.sep
        assert blueprint.autogenerated_path == str(user_resource.parent.absolute()) + os.sep

    def test_class_and_method_path_concatenate_with_verb(self, extractor, write_java):
        write_java("Foo.java", """
            @Path("/foo")
            public class Foo {
                @GET
                @Path("/bar")
                public String bar() { return ""; }
            }
        """)

        blueprints = extractor.extract_blueprints(write_java.root)

        assert [b.endpoint for b in blueprints] == ["/foo/bar/GET"]
        assert blueprints[0].request_context.class_path == "Foo"
        assert blueprints[0].package_name == ""

    def test_class_without_root_annotation_yields_nothing(self, extractor, write_java):
        write_java("Plain.java", """
            package com.example;

            public class Plain {
                @GET
                @Path("/x")
                public String x() { return ""; }
            }
        """)

        assert extractor.extract_blueprints(write_java.root) == []

    def test_interface_service(self, extractor, write_java):
        write_java("Api.java", """
            package com.example;

            @Path("/api")
            public interface Api {
                @GET
                Response list(@QueryParam("page") int page);
            }
        """)

        blueprints = extractor.extract_blueprints(write_java.root)

        assert [b.endpoint for b in blueprints] == ["/api/GET"]
        assert blueprints[0].inputs == (InputParam("page", "page", "int", ParamType.QUERY),)

    def test_value_attribute_and_qualified_annotations(self, extractor, write_java):
        write_java("Orders.java", """
            @javax.ws.rs.Path(value = "/orders")
            public class Orders {
                @javax.ws.rs.GET
                @Path(value = "/open")
                public List<Order> open() { return null; }
            }
        """)

        blueprints = extractor.extract_blueprints(write_java.root)

        assert [b.endpoint for b in blueprints] == ["/orders/open/GET"]

    def test_text_block_path_is_unquoted(self, extractor, write_java):
        write_java("Blocks.java", '''
            @Path("""
                /blocks""")
            public class Blocks {
                @GET
                public String all() { return ""; }
            }
        ''')

        blueprints = extractor.extract_blueprints(write_java.root)

        assert [b.endpoint for b in blueprints] == ["/blocks/GET"]

    def test_primitive_and_void_return_types_are_ignored(self, extractor, write_java):
        write_java("Counter.java", """
            @Path("/count")
            public class Counter {
                @GET
                public int count() { return 0; }

                @POST
                public void reset() { }

                @PUT
                public Integer set(int value) { return value; }
            }
        """)

        blueprints = extractor.extract_blueprints(write_java.root)

        assert [b.handler.method_name for b in blueprints] == ["set"]

    def test_only_files_with_extension_are_scanned(self, extractor, write_java):
        write_java("Foo.txt", """
            @Path("/foo")
            public class Foo {
                @GET
                public String bar() { return ""; }
            }
        """)

        assert extractor.extract_blueprints(write_java.root) == []

    def test_missing_project_dir_returns_empty(self, extractor, tmp_path):
        assert extractor.extract_blueprints(tmp_path / "does-not-exist") == []


class TestFrameworkTagging:

    SPRING_SERVICE = """
        package com.example;

        import org.springframework.web.bind.annotation.RequestParam;

        @Path("/search")
        public class Search {
            @GET
            public Result find(@RequestParam("q") String query) { return null; }
        }
    """

    def test_spring_import_tags_every_blueprint(self, write_java):
        write_java("Search.java", self.SPRING_SERVICE)

        blueprints = RestServiceExtractor().extract_blueprints(write_java.root)

        assert len(blueprints) == 1
        assert blueprints[0].framework is Framework.SPRING
        assert blueprints[0].inputs == (InputParam("query", "q", "String", ParamType.QUERY),)

    def test_custom_framework_marker(self, write_java):
        from websocketizer.extractors.java.import_resolver import ImportResolver

        write_java("Search.java", self.SPRING_SERVICE)
        extractor = RestServiceExtractor(import_resolver=ImportResolver("io.micronaut"))

        blueprints = extractor.extract_blueprints(write_java.root)

        assert blueprints[0].framework is Framework.DEFAULT


class TestBufferPolicies:
    """Two service classes declared in the same file."""

    TWO_SERVICES = """
        package com.example;

        @Path("/a")
        class A {
            @GET
            public String one() { return ""; }
        }

        @Path("/b")
        class B {
            @GET
            public String two() { return ""; }
        }
    """

    def test_per_class_keeps_candidates_with_their_class(self, write_java):
        write_java("Services.java", self.TWO_SERVICES)

        blueprints = RestServiceExtractor(buffer_policy=BufferPolicy.PER_CLASS).extract_blueprints(write_java.root)

        assert sorted((b.endpoint, b.class_name, b.handler.method_name) for b in blueprints) == [
            ("/a/GET", "A", "one"),
            ("/b/GET", "B", "two"),
        ]

    def test_shared_buffer_reprefixes_earlier_candidates(self, write_java):
        write_java("Services.java", self.TWO_SERVICES)

        blueprints = RestServiceExtractor(buffer_policy=BufferPolicy.SHARED).extract_blueprints(write_java.root)

        assert sorted((b.endpoint, b.class_name, b.handler.method_name) for b in blueprints) == [
            ("/a/GET", "A", "one"),
            ("/b/GET", "B", "two"),
            ("/b/a/GET", "B", "one"),
        ]

    def test_nested_class_without_root_is_dropped(self, write_java):
        write_java("Outer.java", """
            @Path("/outer")
            public class Outer {
                @GET
                public String top() { return ""; }

                static class Helper {
                    @POST
                    public String hidden() { return ""; }
                }
            }
        """)

        blueprints = RestServiceExtractor(buffer_policy=BufferPolicy.PER_CLASS).extract_blueprints(write_java.root)

        assert [(b.endpoint, b.handler.method_name) for b in blueprints] == [("/outer/GET", "top")]


class TestFailOpen:
    """Broken inputs never make extraction fail."""

    BROKEN = """
        @Path("/broken")
        public class Broken {
            @GET
            public String x( {
        }
    """

    def test_invalid_file_is_skipped(self, write_java):
        write_java("Broken.java", self.BROKEN)
        write_java("UserResource.java", USER_RESOURCE)
        outcomes = []

        blueprints = RestServiceExtractor(diagnostics=outcomes.append).extract_blueprints(write_java.root)

        assert len(blueprints) == 3
        assert all(b.class_name == "UserResource" for b in blueprints)

        statuses = {os.path.basename(o.path): o for o in outcomes}
        assert statuses["Broken.java"].status is OutcomeStatus.SKIPPED
        assert statuses["Broken.java"].reason.startswith("invalid syntax")
        assert statuses["UserResource.java"].status is OutcomeStatus.EXTRACTED
        assert statuses["UserResource.java"].blueprint_count == 3

    def test_failing_diagnostics_sink_is_ignored(self, write_java):
        write_java("UserResource.java", USER_RESOURCE)

        def sink(outcome):
            raise RuntimeError("sink down")

        blueprints = RestServiceExtractor(diagnostics=sink).extract_blueprints(write_java.root)

        assert len(blueprints) == 3

    def test_extract_file_reports_unreadable_file(self, tmp_path):
        blueprints, outcome = RestServiceExtractor().extract_file(tmp_path / "Missing.java")

        assert blueprints == []
        assert outcome.skipped
        assert outcome.reason.startswith("unreadable")


class TestScanCompilationUnit:
    """The per-file accumulator returned by one traversal."""

    SOURCE = """
        package com.example;

        import com.example.model.Item;

        class Unrooted {
            @GET
            public Item orphan() { return null; }
        }

        @Path("/items")
        class Items {
            @GET
            public Item get(Item probe) { return null; }
        }
    """

    def test_per_class_state(self, java_parser):
        extractor = RestServiceExtractor(buffer_policy=BufferPolicy.PER_CLASS)

        state = extractor.scan_compilation_unit(java_parser.parse(self.SOURCE).root_node, "/p/Items.java")

        assert state.package_name == "com.example"
        assert [i.qualified_name for i in state.imports] == ["com.example.model.Item"]
        assert state.buffer == []
        assert state.scope_marks == []
        assert [(b.endpoint, b.handler.method_name) for b in state.promoted] == [("/items/GET", "get")]
        # qualification happens after the traversal
        assert state.promoted[0].inputs[0].data_type == "Item"

    def test_shared_state_promotes_buffered_candidates_of_earlier_classes(self, java_parser):
        extractor = RestServiceExtractor(buffer_policy=BufferPolicy.SHARED)

        state = extractor.scan_compilation_unit(java_parser.parse(self.SOURCE).root_node, "/p/Items.java")

        assert sorted((b.endpoint, b.class_name, b.handler.method_name) for b in state.promoted) == [
            ("/items/GET", "Items", "get"),
            ("/items/GET", "Items", "orphan"),
        ]
        assert len(state.buffer) == 2
