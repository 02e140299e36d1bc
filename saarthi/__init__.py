# saarthi/__init__.py
from flask import Flask, jsonify
from .extensions import db
from flask_migrate import Migrate
from dotenv import load_dotenv
from flask_jwt_extended import JWTManager
from flask_cors import CORS
import os

load_dotenv()


def create_app(test_config=None):
    app = Flask(__name__)

    frontend_url = os.getenv("FRONTEND_URL", "http://localhost:5173")

    app.config['SQLALCHEMY_DATABASE_URI'] = os.getenv('DATABASE_URL', 'sqlite:///saarthi.db')
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'super-secret')
    app.config['FRONTEND_URL'] = frontend_url
    app.config['FIREBASE_CREDENTIALS_PATH'] = os.getenv("FIREBASE_CREDENTIALS_PATH", "firebase/firebase-adminsdk.json")
    app.config['FIREBASE_STORAGE_BUCKET'] = os.getenv("FIREBASE_STORAGE_BUCKET")
    app.config['ADHERENCE_WINDOW_DAYS'] = int(os.getenv("ADHERENCE_WINDOW_DAYS", "30"))
    app.config['MAX_CONTENT_LENGTH'] = int(os.getenv("MAX_UPLOAD_MB", "10")) * 1024 * 1024

    if test_config:
        app.config.update(test_config)

    db.init_app(app)
    Migrate(app, db)
    jwt = JWTManager(app)

    CORS(app,
         origins=[app.config['FRONTEND_URL']],
         supports_credentials=True,
         methods=["GET", "POST", "PATCH", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization"])

    @app.errorhandler(Exception)
    def handle_error(e):
        from werkzeug.exceptions import HTTPException
        if isinstance(e, HTTPException):
            return jsonify(success=False, message=e.description), e.code
        app.logger.exception("Unhandled error")
        return jsonify(success=False, message=str(e)), 500

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"success": False, "message": "Token expired"}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(err_msg):
        return jsonify({"success": False, "message": f"Invalid token: {err_msg}"}), 422

    @jwt.unauthorized_loader
    def missing_token_callback(err_msg):
        return jsonify({"success": False, "message": f"Missing token: {err_msg}"}), 401

    @app.route("/")
    def index():
        return jsonify(success=True, message="Server running")

    from . import models  # noqa: F401  register tables with the metadata
    from .routes.auth_routes import auth_bp
    from .routes.patient_routes import patient_bp
    from .routes.doctor_routes import doctor_bp
    from .routes.adherence_routes import adherence_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(patient_bp)
    app.register_blueprint(doctor_bp)
    app.register_blueprint(adherence_bp)

    return app
