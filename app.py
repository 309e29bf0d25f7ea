from attendance_records.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host="0.0.0.0", port=app.config["HTTP_PORT"], debug=app.config["DEBUG"])
