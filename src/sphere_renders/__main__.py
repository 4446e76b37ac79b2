from sphere_renders.main import run

if __name__ == "__main__":
    run()
