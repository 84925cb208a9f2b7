from marshmallow import Schema, fields
from flask_smorest.fields import Upload


class HealthSchema(Schema):
    status = fields.String(dump_only=True)
    timestamp = fields.DateTime(dump_only=True)


class MessageSchema(Schema):
    message = fields.String(dump_only=True)


class UploadSchema(Schema):
    file = Upload(required=True, metadata={"description": "Ledger file (.xlsx, .xls or .csv)"})


class SessionQuerySchema(Schema):
    sid = fields.String(load_default=None, metadata={"description": "Session id returned by upload"})


class ExportQuerySchema(SessionQuerySchema):
    format = fields.String(load_default="xlsx", metadata={"description": "xlsx | csv"})
    opening_date = fields.Date(
        load_default=None,
        metadata={"description": "Start of next financial year (YYYY-MM-DD)"}
    )
