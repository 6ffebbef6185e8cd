from cartonizer.api import create_app

app = create_app()

if __name__ == "__main__":
    import uvicorn
    print("Cartonizer starting:")
    print(" - API docs:      http://127.0.0.1:8000/docs")
    print(" - Health check:  http://127.0.0.1:8000/api/v1/health")
    uvicorn.run(app, host="0.0.0.0", port=8000)
