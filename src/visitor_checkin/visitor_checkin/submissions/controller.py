from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.decorators import current_tenant_id, login_required
from ..common.http import json_body
from ..common.validators import optional_text
from ..container import Container
from .model import ResumeUpload, SubmissionFilter, SubmissionForm
from .service import parse_reviewed_filter


def register(app: Flask, container: Container) -> None:
    @app.route("/api/form/<code>/submit", methods=["POST"], endpoint="api_form_submit")
    def submit_form(code: str):
        form = SubmissionForm(
            name=request.form.get("name"),
            email=request.form.get("email"),
            application_type=request.form.get("application_type"),
            reason=request.form.get("reason"),
            latitude=request.form.get("latitude"),
            longitude=request.form.get("longitude"),
        )

        resume = None
        upload = request.files.get("resume")
        if upload and upload.filename:
            resume = ResumeUpload(
                filename=upload.filename,
                content_type=upload.mimetype or "",
                data=upload.read(),
            )

        submission = container.submission_service.submit(code, form, resume)
        return jsonify({
            "success": True,
            "message": "Form submitted successfully",
            "user_id": submission.tenant_id,
            "data": submission.to_dict(),
        }), 201

    @app.route("/api/formDetails", methods=["GET"], endpoint="api_form_details")
    @login_required
    def form_details():
        filters = SubmissionFilter(
            status=optional_text(request.args.get("status")),
            application_type=optional_text(request.args.get("application_type")),
            reviewed=parse_reviewed_filter(request.args.get("reviewed")),
            search=optional_text(request.args.get("search")),
        )
        items = container.submission_service.list_submissions(current_tenant_id(), filters)
        return jsonify({
            "success": True,
            "message": "Form submissions fetched successfully",
            "data": [s.to_dict() for s in items],
        })

    @app.route("/api/form/resume/<int:submission_id>", methods=["GET"], endpoint="api_form_resume")
    @login_required
    def form_resume(submission_id: int):
        resume = container.submission_service.get_resume(current_tenant_id(), submission_id)
        return send_file(
            resume.path,
            mimetype=resume.content_type,
            as_attachment=not resume.inline,
            download_name=resume.download_name,
        )

    @app.route("/api/formDetails/<int:submission_id>/status", methods=["PATCH"], endpoint="api_form_status")
    @login_required
    def update_status(submission_id: int):
        data = json_body()
        status = container.submission_service.update_status(current_tenant_id(), submission_id, data.get("status"))
        return jsonify({"success": True, "message": f"Status updated to {status}"})

    @app.route("/api/formDetails/<int:submission_id>/review", methods=["PATCH"], endpoint="api_form_review")
    @login_required
    def update_review(submission_id: int):
        data = json_body()
        reviewed = container.submission_service.set_reviewed(current_tenant_id(), submission_id, data.get("reviewed"))
        label = "reviewed" if reviewed else "unreviewed"
        return jsonify({"success": True, "message": f"Submission marked as {label}"})

    @app.route("/api/formDetails/<int:submission_id>/update", methods=["PATCH"], endpoint="api_form_update")
    @login_required
    def update_assignment(submission_id: int):
        data = json_body()
        container.submission_service.assign(
            current_tenant_id(),
            submission_id,
            designation=data.get("designation"),
            department_name=data.get("department_name"),
        )
        return jsonify({"success": True, "message": "Submission updated successfully"})

    @app.route("/api/submission/counter", methods=["GET"], endpoint="api_submission_counter")
    @login_required
    def submission_counter():
        return jsonify({"success": True, "count": container.submission_service.count(current_tenant_id())})

    @app.route("/api/submission/list", methods=["GET"], endpoint="api_submission_list")
    @login_required
    def submission_list():
        items = container.submission_service.recent(current_tenant_id())
        return jsonify({"success": True, "data": [s.to_dict() for s in items]})
