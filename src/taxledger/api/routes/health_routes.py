"""
Health Routes
"""
from datetime import datetime
from flask.views import MethodView
from flask_smorest import Blueprint

from ...schemas import HealthSchema


blp = Blueprint(
    "Health",
    __name__,
    url_prefix="/api",
    description="Service Health"
)


@blp.route("/health")
class Health(MethodView):
    @blp.doc(tags=["Health"])
    @blp.response(200, HealthSchema)
    def get(self):
        """Liveness check"""
        return {"status": "healthy", "timestamp": datetime.now()}
