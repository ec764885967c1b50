import requests
import json
import sys

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:3000"

def print_response(name, response):
    print(f"--- {name} ---")
    print(f"Status: {response.status_code}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)
    print("\n")

def run_verification():
    # 1. Create a client
    print("1. Creating client...")
    resp = requests.post(f"{BASE_URL}/clients", json={
        "name": "Verify Client",
        "email": "verify_client@example.com",
    })
    print_response("Create Client", resp)
    if resp.status_code == 409:
        resp = requests.get(f"{BASE_URL}/clients")
        client = next(c for c in resp.json() if c["email"] == "verify_client@example.com")
    elif resp.status_code != 200:
        print("Client creation failed, aborting.")
        return
    else:
        client = resp.json()

    # 2. Duplicate client (Expected 409)
    print("2. Creating duplicate client (Expected 409)...")
    resp = requests.post(f"{BASE_URL}/clients", json={
        "name": "Verify Client",
        "email": "verify_client@example.com",
    })
    print_response("Duplicate Client", resp)

    # 3. Create and fetch a product
    print("3. Creating product...")
    resp = requests.post(f"{BASE_URL}/products", json={"name": "Widget", "price": 9.99})
    print_response("Create Product", resp)
    product = resp.json()
    resp = requests.get(f"{BASE_URL}/products/{product['idProduct']}")
    print_response("Get Product", resp)

    # 4. Bounded list
    print("4. Listing two products...")
    resp = requests.get(f"{BASE_URL}/products/quantity/2")
    print_response("Bounded Products", resp)

    # 5. Add to cart twice, same open cart expected
    print("5. Adding product to cart twice...")
    for _ in range(2):
        resp = requests.post(f"{BASE_URL}/carts/add", json={
            "idClient": client["idClient"],
            "idProduct": product["idProduct"],
            "quantity": 2,
            "unitPrice": product["price"],
        })
        print_response("Add To Cart", resp)
    resp = requests.get(f"{BASE_URL}/carts/status/Processing")
    print_response("Open Carts", resp)

    # 6. Delete twice (Expected success both times)
    print("6. Deleting a throwaway product twice...")
    resp = requests.post(f"{BASE_URL}/products", json={"name": "Throwaway", "price": 1})
    throwaway = resp.json()
    for _ in range(2):
        resp = requests.delete(f"{BASE_URL}/products/{throwaway['idProduct']}")
        print_response("Delete Product", resp)

if __name__ == "__main__":
    run_verification()
