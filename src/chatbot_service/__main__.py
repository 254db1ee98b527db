from chatbot_service.main import run

run()
