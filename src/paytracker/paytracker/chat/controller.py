from __future__ import annotations

from flask import Flask, jsonify, render_template, request

from ..common.web import current_user, json_error, json_unexpected, roles_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError

chat_required = roles_required(Role.ADMIN, Role.MANAGER)


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        return request.get_json(silent=True) or request.form.to_dict()

    @app.route("/chat", methods=["GET"], endpoint="chat")
    @chat_required
    def chat():
        user = current_user()
        return render_template(
            "chat.html",
            me=user.principal_id,
            contacts=container.chat_service.contacts(user),
            active_page="chat",
        )

    @app.route("/api/chat/contacts", methods=["GET"], endpoint="api_chat_contacts")
    @chat_required
    def api_chat_contacts():
        try:
            contacts = container.chat_service.contacts(current_user())
            return jsonify(
                {
                    "success": True,
                    "contacts": [
                        {
                            "id": c.principal_id,
                            "name": c.name,
                            "role": c.role,
                            "online": c.online,
                            "unread": c.unread,
                        }
                        for c in contacts
                    ],
                }
            )
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except Exception:
            return json_unexpected("loading chat contacts")

    @app.route("/api/chat/messages", methods=["GET"], endpoint="api_chat_messages")
    @chat_required
    def api_chat_messages():
        try:
            conversations = container.chat_service.conversations(current_user())
            return jsonify(
                {
                    "success": True,
                    "conversations": {
                        cid: [m.to_dict() for m in messages] for cid, messages in conversations.items()
                    },
                }
            )
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except Exception:
            return json_unexpected("loading chat messages")

    @app.route("/api/chat/send", methods=["POST"], endpoint="api_chat_send")
    @chat_required
    def api_chat_send():
        data = _payload()
        try:
            message_id = container.chat_service.send(
                current_user(),
                str(data.get("receiver_id") or ""),
                str(data.get("text") or ""),
            )
            return jsonify({"success": True, "message": "Message envoyé", "id": message_id})
        except ValidationError as e:
            return json_error(str(e))
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except Exception:
            return json_unexpected("sending a chat message")

    @app.route("/api/chat/read", methods=["POST"], endpoint="api_chat_read")
    @chat_required
    def api_chat_read():
        data = _payload()
        try:
            count = container.chat_service.mark_read(current_user(), str(data.get("conversation_id") or ""))
            return jsonify({"success": True, "message": "Conversation lue", "count": count})
        except ValidationError as e:
            return json_error(str(e))
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except Exception:
            return json_unexpected("marking a conversation read")

    @app.route("/api/chat/heartbeat", methods=["POST"], endpoint="api_chat_heartbeat")
    @chat_required
    def api_chat_heartbeat():
        user = current_user()
        try:
            container.chat_service.heartbeat(user)
            online = container.chat_service.online_users(user)
            return jsonify({"success": True, "online": [p.principal_id for p in online]})
        except AuthorizationError as e:
            return json_error(str(e), 403)
        except Exception:
            return json_unexpected("updating chat presence")
