from blockstats import create_app, socketio

app = create_app()
 
if __name__ == '__main__':
    # Use SocketIO server so the scoreboard ticker and websockets run in dev
    socketio.run(app, debug=True, use_reloader=False)
