"""Open release pull requests for Cargo crates using cargo-release."""
