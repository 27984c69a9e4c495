from datetime import date

from flask import Flask, jsonify
from app.config import Config
from app.extensions import db, migrate, jwt, mail


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    # 1) Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    # models must be imported before create_all / migrations see them
    from app import models  # noqa: F401

    # 2) Batch collaborators (tests swap these out)
    from app.services.record_gateway import SqlRecordGateway
    from app.services.mail_service import MailNotifier
    app.extensions["record_gateway"] = SqlRecordGateway()
    app.extensions["notifier"] = MailNotifier()
    app.extensions["batch_clock"] = date.today

    # 3) Blueprints
    from app.controllers.batch_controller import batch_bp
    app.register_blueprint(batch_bp, url_prefix="/batch")

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    # 4) Scheduler (late borrows + reservation lifecycle)
    from app.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
