from server import server

# uvicorn main:server_app
server_app = server.handler
