from taxledger.app import create_app
from taxledger.config import Config


app = create_app(Config)


# Index
@app.route("/")
def index():
    """Point browsers at the API docs"""
    return {
        "name": app.config["API_TITLE"],
        "docs": app.config["OPENAPI_SWAGGER_UI_PATH"],
        "financialYear": app.config["FINANCIAL_YEAR"],
    }


if __name__ == "__main__":
    app.run(debug=True, port=5001)
