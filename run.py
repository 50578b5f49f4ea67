from r2h_redirect.main import run

# Run the redirect middleware
if __name__ == "__main__":
    run()
