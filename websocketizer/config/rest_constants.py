class RestAnnotationConfig:
    # Marker annotations on a method that declare its HTTP verb
    HTTP_METHOD_ANNOTATIONS = {
        "GET": "GET",
        "POST": "POST",
        "PUT": "PUT",
        "DELETE": "DELETE",
        "HEAD": "HEAD",
        "OPTIONS": "OPTIONS",
        "PATCH": "PATCH",
    }

    # Single-value parameter annotations and the wire origin they select
    PARAM_ANNOTATIONS = {
        # --- JAX-RS ---
        "PathParam": "PATH",
        "QueryParam": "QUERY",
        "HeaderParam": "HEADER",
        "CookieParam": "COOKIE",
        "FormParam": "FORM",
        "MatrixParam": "MATRIX",

        # --- Spring MVC ---
        "PathVariable": "PATH",
        "RequestParam": "QUERY",
        "RequestHeader": "HEADER",
        "CookieValue": "COOKIE",
    }

    # Class-level root annotation and method-level path suffix
    PATH_ANNOTATION = "Path"
    DEFAULT_ROOT_PATH = "/"
    VALUE_ATTRIBUTE = "value"


class JavaParsingConstants:
    SERVICE_NODE_TYPES = {
        'class_declaration', 'interface_declaration',
    }

    ANNOTATION_NODE_TYPES = {
        'annotation', 'marker_annotation',
    }

    PARAMETER_NODE_TYPES = {
        'formal_parameter', 'spread_parameter',
    }

    PRIMITIVE_TYPE_NODES = {
        'integral_type', 'floating_point_type', 'boolean_type',
    }

    NON_REFERENCE_RETURN_TYPES = PRIMITIVE_TYPE_NODES | {'void_type'}

    ENCODING_FALLBACKS = ['utf-8', 'latin-1']


class SourceLayoutConstants:
    MAIN_SOURCE_SEGMENTS = ("src", "main", "java")
    TEST_SOURCE_SEGMENTS = ("src", "test", "java")

    JAVA_EXTENSION = ".java"
    SPRING_FRAMEWORK_MARKER = "org.springframework"
