"""Swagger/OpenAPI configuration for the application."""
from flask_swagger_ui import get_swaggerui_blueprint

# Swagger UI configuration
SWAGGER_URL = '/api/docs'
API_URL = '/api/swagger.json'

def get_swagger_blueprint():
    """Create and return swagger UI blueprint."""
    return get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            'app_name': "Tutor Hub API",
            'defaultModelsExpandDepth': -1,
            'docExpansion': 'list',
            'filter': True,
            'supportedSubmitMethods': ['get', 'post', 'put'],
            'validatorUrl': None,
        }
    )

def _ref(name):
    return {"application/json": {"schema": {"$ref": f"#/components/schemas/{name}"}}}

def _operation(tag, summary, secured=True, body=None, params=None, ok="200"):
    """Build one OpenAPI operation with the standard envelope responses."""
    operation = {
        "tags": [tag],
        "summary": summary,
        "responses": {
            ok: {"description": "Success", "content": _ref("Success")},
            "400": {"description": "Validation error", "content": _ref("Error")},
        }
    }
    if secured:
        operation["security"] = [{"bearerAuth": []}]
        operation["responses"]["401"] = {"description": "Unauthorized", "content": _ref("Error")}
        operation["responses"]["403"] = {"description": "Forbidden", "content": _ref("Error")}
    if body:
        operation["requestBody"] = {
            "required": True,
            "content": {"application/json": {"schema": {"type": "object", "properties": body}}}
        }
    if params:
        operation["parameters"] = [
            {"name": name, "in": location, "schema": {"type": kind}}
            for name, location, kind in params
        ]
    return operation

SESSION_ID = ("session_id", "path", "integer")
STRING = {"type": "string"}

def generate_swagger_spec():
    """Generate OpenAPI/Swagger specification."""
    session_actions = {
        f"/sessions/{{session_id}}/{action}": {
            "post": _operation("Sessions", summary, body=body, params=[SESSION_ID])
        }
        for action, summary, body in [
            ("start", "Start a scheduled session", None),
            ("complete", "Complete an ongoing session", {"notes": STRING}),
            ("cancel", "Cancel a scheduled session", None),
            ("no-show", "Mark a session as no-show", {"reason": STRING}),
        ]
    }

    paths = {
        "/auth/login": {"post": _operation(
            "Authentication", "Login", secured=False,
            body={"email": STRING, "password": STRING}
        )},
        "/auth/me": {"get": _operation("Authentication", "Current user profile")},
        "/auth/refresh": {"post": _operation("Authentication", "Refresh access token")},
        "/sessions": {"get": _operation("Sessions", "List sessions", params=[
            ("date_filter", "query", "string"), ("class_id", "query", "integer"),
            ("status", "query", "string"), ("search", "query", "string"),
            ("page", "query", "integer"), ("per_page", "query", "integer"),
        ])},
        "/sessions/export": {"get": _operation("Sessions", "Export sessions as CSV")},
        "/sessions/{session_id}": {"get": _operation("Sessions", "Session detail", params=[SESSION_ID])},
        "/sessions/start-slot": {"post": _operation(
            "Sessions", "Start a timetable slot",
            body={"class_id": {"type": "integer"}, "date": STRING, "time": STRING}
        )},
        "/sessions/{session_id}/bookmark": {"put": _operation(
            "Sessions", "Save bookmark notes", body={"bookmark": STRING}, params=[SESSION_ID]
        )},
        "/sessions/{session_id}/attendance/{student_id}": {"put": _operation(
            "Sessions", "Update a student's attendance",
            body={"status": {"type": "string", "enum": ["present", "late", "absent", "excused"]},
                  "remarks": STRING},
            params=[SESSION_ID, ("student_id", "path", "integer")]
        )},
        "/sessions/{session_id}/elapsed": {"get": _operation(
            "Sessions", "Elapsed time of an ongoing session", params=[SESSION_ID]
        )},
        "/timetable": {"get": _operation("Timetable", "Sessions and virtual slots", params=[
            ("view", "query", "string"), ("date", "query", "string"),
            ("class_id", "query", "integer"), ("status", "query", "string"),
        ])},
        "/dashboard": {"get": _operation("Dashboard", "Teacher dashboard")},
        "/classes": {"get": _operation("Classes", "List classes")},
        "/classes/{class_id}": {"get": _operation(
            "Classes", "Class detail", params=[("class_id", "path", "integer")]
        )},
        "/classes/{class_id}/students": {"get": _operation(
            "Classes", "Class students", params=[("class_id", "path", "integer")]
        )},
        "/payslips": {"get": _operation("Payslips", "Own payslips")},
        "/admin/sessions": {"post": _operation(
            "Admin", "Schedule a session", ok="201",
            body={"class_id": {"type": "integer"}, "date": STRING, "time": STRING,
                  "duration_minutes": {"type": "integer"}, "notes": STRING}
        )},
        "/admin/sessions/{session_id}/verify": {"post": _operation(
            "Admin", "Verify a completed session", params=[SESSION_ID]
        )},
        "/admin/sessions/{session_id}/unverify": {"post": _operation(
            "Admin", "Remove session verification", params=[SESSION_ID]
        )},
        "/admin/payslips": {"post": _operation(
            "Admin", "Generate a payslip", ok="201",
            body={"teacher_id": {"type": "integer"}, "month": STRING}
        )},
        "/admin/payslips/{payslip_id}/finalize": {"post": _operation(
            "Admin", "Finalize a payslip", params=[("payslip_id", "path", "integer")]
        )},
        "/admin/payslips/{payslip_id}/pay": {"post": _operation(
            "Admin", "Mark a payslip as paid", params=[("payslip_id", "path", "integer")]
        )},
    }
    paths.update(session_actions)

    return {
        "openapi": "3.0.0",
        "info": {
            "title": "Tutor Hub API",
            "description": "Class sessions, attendance, timetables and payslips for tutoring centres",
            "version": "1.0.0"
        },
        "servers": [
            {"url": "http://127.0.0.1:5000/api", "description": "Development server"}
        ],
        "components": {
            "securitySchemes": {
                "bearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}
            },
            "schemas": {
                "Error": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean"},
                        "message": {"type": "string"},
                        "status_code": {"type": "integer"}
                    }
                },
                "Success": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean", "default": False},
                        "message": {"type": "string"},
                        "data": {"type": "object"},
                        "meta": {"type": "object"}
                    }
                }
            }
        },
        "paths": paths
    }
